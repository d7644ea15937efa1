from typing import Any, Generic, TypeVar

from genawait.core.airlock import Airlock, AirlockSlot
from genawait.core.type_checks import check_type
from genawait.exceptions import ReentrancyViolationError

from .suspension import Suspension

Y = TypeVar("Y")
R = TypeVar("R")


class Co(Generic[Y, R]):
    """
    Suspension handle passed to a producer body.

    ``await co.yield_(value)`` hands ``value`` to the generator and returns
    the value the generator is next resumed with. The handle is only usable
    from inside the producer while its generator is stepping it.
    """

    __slots__ = (
        "_airlock",
        "_yield_type",
    )

    def __init__(
        self,
        airlock: Airlock[Y, R],
        yield_type: Any | None = None,
    ) -> None:
        self._airlock = airlock
        self._yield_type = yield_type

    def yield_(self, value: Y) -> Suspension[R]:
        airlock = self._airlock

        if airlock.sealed:
            raise ReentrancyViolationError(
                "Co.yield_ was called after its generator finished. The handle "
                "should have been dropped by now - do not let it escape the producer."
            )

        if airlock.active is False:
            raise ReentrancyViolationError(
                "Co.yield_ was called outside of its generator's active step"
            )

        if airlock.slot == AirlockSlot.HOLDING_YIELD:
            raise ReentrancyViolationError(
                "Co.yield_ was called again before the previous value was awaited. "
                "Always await the result of Co.yield_."
            )

        check_type(value, self._yield_type, "yielded value")

        airlock.put_yield(value)

        return Suspension(airlock)

    def __repr__(self) -> str:
        return f"Co({self._airlock!r})"
