from __future__ import annotations

import collections.abc
import inspect
import sys
import threading
import uuid
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Coroutine,
    Generic,
    TypeVar,
)

from genawait.core.airlock import Airlock
from genawait.core.co import Co
from genawait.core.engine import AsyncStep, sync_step
from genawait.core.state import Completed, GenStatus, Yielded
from genawait.exceptions import ConstructionMismatchError, GeneratorError
from genawait.logging import (
    LOGGER_NAME,
    GenDebug,
    GenError,
    GenTrace,
    GenWarning,
    genawait_logger,
)
from genawait.snowflake import SnowflakeGenerator

from .gen_frame import GenFrame

if TYPE_CHECKING:
    from genawait.adapters.gen_iterator import GenIterator
    from genawait.adapters.gen_stream import GenStream

Y = TypeVar("Y")
R = TypeVar("R")
C = TypeVar("C")

Producer = Callable[[Co[Y, R]], Coroutine[Any, Any, C]]


_gen_ids = SnowflakeGenerator(
    (uuid.uuid1().int + threading.get_native_id()) >> 64
)


class Gen(Generic[Y, R, C]):
    """
    Drives a producer one ``Co.yield_`` at a time.

    ``producer`` is called once, with a fresh ``Co``, and must return a
    coroutine (define it with ``async def``). Each ``step``/``resume``
    runs the producer until it yields, returning ``Yielded(value)``, or
    until it returns, returning ``Completed(value)``. The value passed to
    a step becomes the result of the ``await co.yield_(...)`` the
    producer is parked on; the value passed to the very first step is
    dropped, since no ``yield_`` is waiting for it yet.

    Producers that also await external sources (sockets, timers, other
    coroutines that suspend) must be driven with ``async_step`` or the
    ``async_resume`` variants from inside a running scheduler.

    Passing ``yield_type``, ``resume_type`` or ``completion_type`` turns on
    runtime checks of the values crossing the airlock.
    """

    def __init__(
        self,
        producer: Producer[Y, R, C],
        *,
        name: str | None = None,
        yield_type: Any | None = None,
        resume_type: Any | None = None,
        completion_type: Any | None = None,
    ) -> None:
        if not callable(producer):
            raise ConstructionMismatchError(
                f"Producer must be callable, got {type(producer).__name__}"
            )

        if name is None:
            name = getattr(producer, "__qualname__", type(producer).__name__)

        self.gen_id = _gen_ids.generate_sync()
        self.name = name
        self._logger = genawait_logger

        airlock: Airlock[Y, R] = Airlock()
        body = producer(
            Co(
                airlock,
                yield_type=yield_type,
            )
        )

        if not isinstance(body, collections.abc.Coroutine):
            airlock.seal()

            if inspect.isgenerator(body) or inspect.isasyncgen(body):
                body.close()

            raise ConstructionMismatchError(
                f"Producer {name} returned {type(body).__name__}, expected a coroutine - "
                "define the producer with async def and hand out values with await co.yield_(...)"
            )

        self._frame: GenFrame[Y, R, C] = GenFrame(
            body,
            airlock,
            resume_type=resume_type,
            completion_type=completion_type,
        )

        self._trace(GenDebug, "Created generator")

    @property
    def status(self) -> GenStatus:
        return self._frame.status

    @property
    def done(self) -> bool:
        return self._frame.status == GenStatus.DONE

    def step(self, resume_value: R | None = None) -> Yielded[Y] | Completed[C]:
        try:
            state = sync_step(self._frame, resume_value)

        except Exception as err:
            self._trace_error(err)
            raise

        self._trace_state(state)

        return state

    def resume(self) -> Yielded[Y] | Completed[C]:
        return self.step(None)

    def resume_with(self, resume_value: R) -> Yielded[Y] | Completed[C]:
        return self.step(resume_value)

    async def async_step(self, resume_value: R | None = None) -> Yielded[Y] | Completed[C]:
        try:
            state = await AsyncStep(self._frame, resume_value)

        except Exception as err:
            entry = self._error_entry(err)
            if self._logger.enabled(entry.level, name=LOGGER_NAME):
                await self._logger.log(entry, name=LOGGER_NAME)

            raise

        entry = self._state_entry(state)
        if self._logger.enabled(entry.level, name=LOGGER_NAME):
            await self._logger.log(entry, name=LOGGER_NAME)

        return state

    async def async_resume(self) -> Yielded[Y] | Completed[C]:
        return await self.async_step(None)

    async def async_resume_with(self, resume_value: R) -> Yielded[Y] | Completed[C]:
        return await self.async_step(resume_value)

    def close(self):
        if self._frame.status == GenStatus.DONE:
            return

        previous_status = self._frame.status
        self._frame.close()

        self._trace(
            GenDebug,
            f"Closed generator before completion (was {previous_status.value})",
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __iter__(self) -> GenIterator[Y]:
        from genawait.adapters.gen_iterator import GenIterator

        return GenIterator(self)

    def __aiter__(self) -> GenStream[Y]:
        from genawait.adapters.gen_stream import GenStream

        return GenStream(self)

    def __del__(self):
        frame: GenFrame | None = getattr(self, "_frame", None)
        if frame is None or frame.status == GenStatus.DONE:
            return

        previous_status = frame.status

        # Nothing can still be awaiting a step once the Gen itself is unreachable.
        try:
            frame.close(force=True)

        except GeneratorError as err:
            if sys.is_finalizing() is False:
                self._trace(
                    GenWarning,
                    f"Generator failed to tear down after being garbage collected (was {previous_status.value}): {err}",
                )

            return

        if sys.is_finalizing() is False:
            self._trace(
                GenWarning if previous_status == GenStatus.RUNNING else GenDebug,
                f"Generator was garbage collected before completion (was {previous_status.value})",
            )

    def __repr__(self) -> str:
        return f"Gen(name={self.name!r}, gen_id={self.gen_id}, status={self._frame.status.value})"

    def _trace(
        self,
        entry_type: type[GenTrace] | type[GenDebug] | type[GenWarning],
        message: str,
    ):
        entry = entry_type(
            message=message,
            gen_id=self.gen_id,
            gen_name=self.name,
            status=self._frame.status.value,
        )

        if self._logger.enabled(entry.level, name=LOGGER_NAME):
            self._logger.write(entry, name=LOGGER_NAME)

    def _trace_state(self, state: Yielded[Y] | Completed[C]):
        entry = self._state_entry(state)
        if self._logger.enabled(entry.level, name=LOGGER_NAME):
            self._logger.write(entry, name=LOGGER_NAME)

    def _trace_error(self, err: Exception):
        entry = self._error_entry(err)
        if self._logger.enabled(entry.level, name=LOGGER_NAME):
            self._logger.write(entry, name=LOGGER_NAME)

    def _state_entry(self, state: Yielded[Y] | Completed[C]):
        if isinstance(state, Yielded):
            return GenTrace(
                message=f"Yielded {state.value!r}",
                gen_id=self.gen_id,
                gen_name=self.name,
                status=self._frame.status.value,
            )

        return GenDebug(
            message=f"Completed with {state.value!r}",
            gen_id=self.gen_id,
            gen_name=self.name,
            status=self._frame.status.value,
        )

    def _error_entry(self, err: Exception):
        return GenError(
            message=f"Generator failed with {type(err).__name__}",
            gen_id=self.gen_id,
            gen_name=self.name,
            status=self._frame.status.value,
            error=str(err),
        )
