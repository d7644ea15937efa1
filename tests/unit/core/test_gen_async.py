import asyncio
from typing import List

import pytest

from genawait import (
    Co,
    Completed,
    Gen,
    GenStatus,
    ReentrancyViolationError,
    UseAfterCompletionError,
    Yielded,
)


async def slow_producer(co: Co[int, None]):
    await asyncio.sleep(0)
    await co.yield_(10)
    await asyncio.sleep(0.01)
    await co.yield_(20)


class TestAsyncResume:
    @pytest.mark.asyncio
    async def test_external_waits_pass_through_scheduler(self):
        gen = Gen(slow_producer)

        assert await gen.async_resume() == Yielded(10)
        assert await gen.async_resume() == Yielded(20)
        assert await gen.async_resume() == Completed(None)

        with pytest.raises(UseAfterCompletionError):
            await gen.async_resume()

    @pytest.mark.asyncio
    async def test_resume_values_round_trip(self):
        async def doubler(co: Co[int, int]) -> str:
            value = await co.yield_(0)
            while value < 100:
                await asyncio.sleep(0)
                value = await co.yield_(value * 2)

            return "overflow"

        gen = Gen(doubler)

        assert await gen.async_step(0) == Yielded(0)
        assert await gen.async_resume_with(5) == Yielded(10)
        assert await gen.async_resume_with(30) == Yielded(60)
        assert await gen.async_resume_with(150) == Completed("overflow")

    @pytest.mark.asyncio
    async def test_sync_and_async_steps_share_one_generator(self):
        async def pure(co: Co[int, None]):
            await co.yield_(1)
            await co.yield_(2)

        gen = Gen(pure)

        assert gen.resume() == Yielded(1)
        assert await gen.async_resume() == Yielded(2)
        assert gen.resume() == Completed(None)

    @pytest.mark.asyncio
    async def test_step_rejected_while_async_step_waits(self):
        ready = asyncio.Event()

        async def waits(co: Co[str, None]):
            await ready.wait()
            await co.yield_("ready")

        gen = Gen(waits)
        pending = asyncio.create_task(gen.async_resume())
        await asyncio.sleep(0)

        assert gen.status == GenStatus.RUNNING

        with pytest.raises(ReentrancyViolationError, match="already running"):
            gen.resume()

        ready.set()

        assert await pending == Yielded("ready")
        assert gen.status == GenStatus.SUSPENDED

    @pytest.mark.asyncio
    async def test_future_exceptions_reach_producer(self):
        loop = asyncio.get_running_loop()
        future: asyncio.Future[int] = loop.create_future()

        async def waits(co: Co[str, None]):
            try:
                await future

            except ValueError as err:
                await co.yield_(str(err))

        gen = Gen(waits)
        pending = asyncio.create_task(gen.async_resume())
        await asyncio.sleep(0)

        future.set_exception(ValueError("bad"))

        assert await pending == Yielded("bad")

    @pytest.mark.asyncio
    async def test_cancellation_unwinds_producer(self):
        events: List[str] = []

        async def waits_forever(co: Co[int, None]):
            try:
                await asyncio.Event().wait()

            except asyncio.CancelledError:
                events.append("cancelled")
                raise

        gen = Gen(waits_forever)
        pending = asyncio.create_task(gen.async_resume())
        await asyncio.sleep(0)

        pending.cancel()

        with pytest.raises(asyncio.CancelledError):
            await pending

        assert events == ["cancelled"]
        assert gen.done is True

    @pytest.mark.asyncio
    async def test_close_while_suspended_between_async_steps(self):
        events: List[str] = []

        async def producer(co: Co[int, None]):
            try:
                await asyncio.sleep(0)
                await co.yield_(1)
                await co.yield_(2)

            finally:
                events.append("released")

        gen = Gen(producer)
        assert await gen.async_resume() == Yielded(1)

        gen.close()

        assert events == ["released"]
        assert gen.done is True

    @pytest.mark.asyncio
    async def test_close_rejected_while_async_step_waits(self):
        ready = asyncio.Event()
        events: List[str] = []

        async def waits(co: Co[str, None]):
            try:
                await ready.wait()
                await co.yield_("ready")
                await co.yield_("again")

            finally:
                events.append("released")

        gen = Gen(waits)
        pending = asyncio.create_task(gen.async_resume())
        await asyncio.sleep(0)

        with pytest.raises(ReentrancyViolationError, match="async step is still pending"):
            gen.close()

        assert gen.status == GenStatus.RUNNING
        assert events == []

        ready.set()

        assert await asyncio.wait_for(pending, 1) == Yielded("ready")

        gen.close()

        assert events == ["released"]
        assert gen.done is True

    @pytest.mark.asyncio
    async def test_cancelling_waiting_task_then_closing(self):
        events: List[str] = []

        async def waits_forever(co: Co[int, None]):
            try:
                await asyncio.Event().wait()

            finally:
                events.append("released")

        gen = Gen(waits_forever)
        pending = asyncio.create_task(gen.async_resume())
        await asyncio.sleep(0)

        with pytest.raises(ReentrancyViolationError):
            gen.close()

        pending.cancel()

        with pytest.raises(asyncio.CancelledError):
            await pending

        gen.close()

        assert events == ["released"]
        assert gen.done is True
