from __future__ import annotations

from typing import Generator, Generic, TypeVar

from genawait.core.airlock import Airlock
from genawait.exceptions import ReentrancyViolationError

R = TypeVar("R")


class Suspension(Generic[R]):
    """
    Awaitable returned by ``Co.yield_``. Awaiting it hands control back to
    the generator driving the producer and evaluates to the value the
    driver resumes with.
    """

    __slots__ = (
        "_airlock",
        "_awaited",
    )

    def __init__(self, airlock: Airlock) -> None:
        self._airlock = airlock
        self._awaited = False

    @property
    def airlock(self):
        return self._airlock

    def __await__(self) -> Generator[Suspension[R], None, R]:
        if self._awaited:
            raise ReentrancyViolationError(
                "The result of Co.yield_ can only be awaited once"
            )

        self._awaited = True

        yield self

        return self._airlock.take_resume()
