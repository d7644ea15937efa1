from __future__ import annotations

from typing import TYPE_CHECKING, AsyncIterator, TypeVar

from genawait.core.state import GenStatus, Yielded

if TYPE_CHECKING:
    from genawait.core.gen import Gen

Y = TypeVar("Y")


class GenStream(AsyncIterator[Y]):
    """
    Async iterator over a generator whose producer may also await external
    sources. Those waits pass through to the running scheduler; only the
    producer's completion ends the stream.
    """

    __slots__ = (
        "_gen",
        "_exhausted",
    )

    def __init__(self, gen: Gen[Y, None, object]) -> None:
        self._gen = gen
        self._exhausted = gen.status == GenStatus.DONE

    def __aiter__(self):
        return self

    async def __anext__(self) -> Y:
        if self._exhausted:
            raise StopAsyncIteration

        try:
            state = await self._gen.async_resume()

        except BaseException:
            self._exhausted = True
            raise

        if isinstance(state, Yielded):
            return state.value

        self._exhausted = True
        raise StopAsyncIteration

    async def aclose(self):
        self._gen.close()
        self._exhausted = True
