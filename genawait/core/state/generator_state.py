from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

Y = TypeVar("Y")
C = TypeVar("C")


@dataclass(slots=True, frozen=True)
class Yielded(Generic[Y]):
    value: Y


@dataclass(slots=True, frozen=True)
class Completed(Generic[C]):
    value: C


@dataclass(slots=True, frozen=True)
class ExternalWait:
    signal: Any


GeneratorState = Union[Yielded[Y], Completed[C]]
