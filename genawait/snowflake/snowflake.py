from dataclasses import dataclass

from .constants import MAX_INSTANCE, MAX_SEQ


@dataclass(slots=True, frozen=True)
class Snowflake:
    timestamp: int
    instance: int
    seq: int = 0

    @classmethod
    def parse(cls, snowflake: int) -> "Snowflake":
        return cls(
            timestamp=snowflake >> 22,
            instance=snowflake >> 12 & MAX_INSTANCE,
            seq=snowflake & MAX_SEQ,
        )

    @property
    def value(self) -> int:
        return self.timestamp << 22 | self.instance << 12 | self.seq
