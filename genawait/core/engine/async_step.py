from __future__ import annotations

from typing import Any, Generator, Generic, TypeVar

from genawait.core.gen.gen_frame import GenFrame
from genawait.core.state import Completed, ExternalWait, Yielded
from genawait.exceptions import ReentrancyViolationError

Y = TypeVar("Y")
R = TypeVar("R")
C = TypeVar("C")


class AsyncStep(Generic[Y, R, C]):
    """
    Awaitable that advances a producer to its next ``Co.yield_`` or to
    completion. Anything else the producer waits on is passed up to the
    awaiting scheduler unchanged, and whatever the scheduler sends or
    throws back is passed down into the producer.
    """

    __slots__ = (
        "_frame",
        "_resume_value",
        "_awaited",
    )

    def __init__(
        self,
        frame: GenFrame[Y, R, C],
        resume_value: R,
    ) -> None:
        self._frame = frame
        self._resume_value = resume_value
        self._awaited = False

    def __await__(self) -> Generator[Any, Any, Yielded[Y] | Completed[C]]:
        if self._awaited:
            raise ReentrancyViolationError(
                "An async generator step can only be awaited once"
            )

        self._awaited = True

        frame = self._frame
        frame.begin(self._resume_value)

        value: Any = None
        error: BaseException | None = None

        while True:
            outcome = frame.advance(value, error)

            if not isinstance(outcome, ExternalWait):
                return outcome

            try:
                value = yield outcome.signal
                error = None

            except GeneratorExit:
                frame.close(force=True)
                raise

            except BaseException as err:
                value = None
                error = err
