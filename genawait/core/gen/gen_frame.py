from typing import (
    Any,
    Coroutine,
    Generic,
    TypeVar,
)

from genawait.core.airlock import Airlock, AirlockSlot
from genawait.core.co import Suspension
from genawait.core.state import (
    Completed,
    ExternalWait,
    GenStatus,
    Yielded,
)
from genawait.core.type_checks import check_type
from genawait.exceptions import (
    ReentrancyViolationError,
    UseAfterCompletionError,
)

Y = TypeVar("Y")
R = TypeVar("R")
C = TypeVar("C")


class GenFrame(Generic[Y, R, C]):
    """
    Storage for one suspended producer body and its airlock, plus the
    lifecycle transitions the step engines drive it through.

    The body is a coroutine object created once and never replaced, so the
    ``Co`` captured inside it keeps pointing at this frame's airlock for as
    long as the body exists.
    """

    __slots__ = (
        "_body",
        "_airlock",
        "_status",
        "_executing",
        "_resume_type",
        "_completion_type",
    )

    def __init__(
        self,
        body: Coroutine[Any, Any, C],
        airlock: Airlock[Y, R],
        resume_type: Any | None = None,
        completion_type: Any | None = None,
    ) -> None:
        self._body = body
        self._airlock = airlock
        self._status = GenStatus.NOT_STARTED
        self._executing = False
        self._resume_type = resume_type
        self._completion_type = completion_type

    @property
    def status(self):
        return self._status

    @property
    def airlock(self):
        return self._airlock

    @property
    def executing(self):
        return self._executing

    def begin(self, resume_value: R):
        if self._status == GenStatus.DONE:
            raise UseAfterCompletionError(
                "Generator was resumed after it finished"
            )

        if self._status == GenStatus.RUNNING:
            raise ReentrancyViolationError(
                "Generator was resumed while it was already running"
            )

        # Nothing awaits the first resume value, so it is dropped.
        if self._status == GenStatus.SUSPENDED:
            check_type(resume_value, self._resume_type, "resume value")
            self._airlock.put_resume(resume_value)

        self._status = GenStatus.RUNNING
        self._airlock.activate()

    def advance(
        self,
        value: Any = None,
        error: BaseException | None = None,
    ) -> Yielded[Y] | Completed[C] | ExternalWait:
        self._executing = True

        try:
            if error is None:
                signal = self._body.send(value)

            else:
                signal = self._body.throw(error)

        except StopIteration as completion:
            self._executing = False
            return self._complete(completion.value)

        except BaseException:
            self._executing = False
            self._finish()
            raise

        self._executing = False

        if isinstance(signal, Suspension):
            if signal.airlock is not self._airlock:
                self.abort(
                    ReentrancyViolationError(
                        "Producer awaited Co.yield_ on a handle that belongs to a different generator"
                    )
                )

            return self._suspend()

        return ExternalWait(signal)

    def abort(self, error: BaseException):
        try:
            self.close(force=True)

        except BaseException as close_error:
            raise error from close_error

        raise error

    def close(self, force: bool = False):
        """
        Tear the producer down at its current suspension point.

        ``force`` is reserved for the step engines, which close a frame
        they are themselves driving (a pending async step being torn
        down, or a step aborted on misuse).
        """
        if self._status == GenStatus.DONE:
            return

        if self._executing:
            raise ReentrancyViolationError(
                "Generator cannot be closed from inside its own producer"
            )

        if self._status == GenStatus.RUNNING and force is False:
            raise ReentrancyViolationError(
                "Generator cannot be closed while an async step is still pending - "
                "cancel the task awaiting that step instead"
            )

        self._finish()
        self._body.close()

    def _suspend(self) -> Yielded[Y]:
        value = self._airlock.take_yield()
        self._status = GenStatus.SUSPENDED
        self._airlock.deactivate()

        return Yielded(value)

    def _complete(self, value: C) -> Completed[C]:
        pending = self._airlock.slot == AirlockSlot.HOLDING_YIELD
        self._finish()

        if pending:
            raise ReentrancyViolationError(
                "Producer finished while a Co.yield_ value was still pending. "
                "Always await the result of Co.yield_."
            )

        check_type(value, self._completion_type, "completion value")

        return Completed(value)

    def _finish(self):
        self._status = GenStatus.DONE
        self._airlock.seal()
        self._airlock.clear()
