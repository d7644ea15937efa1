from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, TypeVar

from genawait.core.state import GenStatus, Yielded

if TYPE_CHECKING:
    from genawait.core.gen import Gen

Y = TypeVar("Y")


class GenIterator(Iterator[Y]):
    """
    Pulls values out of a generator with ``resume()``. Once the producer
    completes the iterator stays exhausted and the completion value is
    discarded.
    """

    __slots__ = (
        "_gen",
        "_exhausted",
    )

    def __init__(self, gen: Gen[Y, None, object]) -> None:
        self._gen = gen
        self._exhausted = gen.status == GenStatus.DONE

    def __iter__(self):
        return self

    def __next__(self) -> Y:
        if self._exhausted:
            raise StopIteration

        try:
            state = self._gen.resume()

        except BaseException:
            self._exhausted = True
            raise

        if isinstance(state, Yielded):
            return state.value

        self._exhausted = True
        raise StopIteration
