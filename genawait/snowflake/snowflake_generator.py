from time import time
from typing import Optional

from .constants import MAX_INSTANCE, MAX_SEQ, MAX_TS
from .snowflake import Snowflake


class SnowflakeGenerator:
    def __init__(
        self,
        instance: int,
        *,
        seq: int = 0,
        timestamp: Optional[int] = None,
    ):
        current = int(time() * 1000)

        timestamp = timestamp or current

        self._ts = timestamp & MAX_TS
        self._instance = instance & MAX_INSTANCE
        self._inf = self._instance << 12
        self._seq = seq

    @classmethod
    def from_snowflake(cls, sf: Snowflake) -> "SnowflakeGenerator":
        return cls(sf.instance, seq=sf.seq, timestamp=sf.timestamp)

    @property
    def instance(self):
        return self._instance

    def __iter__(self):
        return self

    def __next__(self) -> int:
        return self.generate_sync()

    def generate_sync(self) -> int:
        """
        Ids stay unique and increasing when the clock stalls or runs
        backwards by borrowing from the next millisecond.
        Not thread-safe.
        """
        current = int(time() * 1000) & MAX_TS

        if current > self._ts:
            self._ts = current
            self._seq = 0

        elif self._seq == MAX_SEQ:
            self._ts += 1
            self._seq = 0

        else:
            self._seq += 1

        return self._ts << 22 | self._inf | self._seq
