from typing import Any, Generic, TypeVar

from genawait.exceptions import ReentrancyViolationError

from .airlock_slot import AirlockSlot

Y = TypeVar("Y")
R = TypeVar("R")


class Airlock(Generic[Y, R]):
    """
    Single-slot handoff cell shared by a generator and its producer body.

    Values pass in one direction at a time. A value must be taken before
    the next one can be put, in either direction. No lock is involved: the
    producer and the driver never run at the same time.
    """

    __slots__ = (
        "_slot",
        "_value",
        "_active",
        "_sealed",
    )

    def __init__(self) -> None:
        self._slot = AirlockSlot.EMPTY
        self._value: Any = None
        self._active = False
        self._sealed = False

    @property
    def slot(self):
        return self._slot

    @property
    def active(self):
        return self._active

    @property
    def sealed(self):
        return self._sealed

    def put_yield(self, value: Y):
        self._put(AirlockSlot.HOLDING_YIELD, value)

    def take_yield(self) -> Y:
        return self._take(AirlockSlot.HOLDING_YIELD)

    def put_resume(self, value: R):
        self._put(AirlockSlot.HOLDING_RESUME, value)

    def take_resume(self) -> R:
        return self._take(AirlockSlot.HOLDING_RESUME)

    def activate(self):
        if self._sealed:
            raise ReentrancyViolationError(
                "Airlock is sealed - its generator has already finished"
            )

        self._active = True

    def deactivate(self):
        self._active = False

    def seal(self):
        self._active = False
        self._sealed = True

    def clear(self):
        self._slot = AirlockSlot.EMPTY
        self._value = None

    def _put(self, slot: AirlockSlot, value: Any):
        if self._sealed:
            raise ReentrancyViolationError(
                f"Cannot put {_describe(slot)} - airlock is sealed"
            )

        if self._slot != AirlockSlot.EMPTY:
            raise ReentrancyViolationError(
                f"Cannot put {_describe(slot)} - airlock still holds an unconsumed {_describe(self._slot)}"
            )

        self._slot = slot
        self._value = value

    def _take(self, slot: AirlockSlot):
        if self._slot != slot:
            held = "nothing" if self._slot == AirlockSlot.EMPTY else f"a {_describe(self._slot)}"
            raise ReentrancyViolationError(
                f"Cannot take {_describe(slot)} - airlock holds {held}"
            )

        value = self._value
        self.clear()

        return value

    def __repr__(self) -> str:
        return f"Airlock(slot={self._slot.value}, active={self._active}, sealed={self._sealed})"


def _describe(slot: AirlockSlot):
    if slot == AirlockSlot.HOLDING_YIELD:
        return "yielded value"

    if slot == AirlockSlot.HOLDING_RESUME:
        return "resume value"

    return "empty slot"
