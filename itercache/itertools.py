from collections import deque
from typing import Deque, Iterable, Iterator, Optional, TypeVar


_T = TypeVar('_T')


class SourceExhaustedDuringFill(Exception):
    def __init__(self, requested: int, filled: int) -> None:
        self.requested = requested
        self.filled = filled
        super().__init__(f'Source exhausted after {filled} of {requested} requested items')


class PrefetchCache(Iterator[_T]):
    """An iterator that evaluates items of the wrapped iterable ahead of time.

    Items pulled by one of the fill methods wait in a FIFO buffer and are handed out
    before anything else is taken from the source, so iterating over the cache yields
    exactly what iterating over the source would have yielded.
    """

    def __init__(self, iterable: Iterable[_T]) -> None:
        self._source = iter(iterable)
        self._buffer: Deque[_T] = deque()

    def __iter__(self) -> Iterator[_T]:
        return self

    def __next__(self) -> _T:
        try:
            return self._buffer.popleft()
        except IndexError:
            return next(self._source)

    @property
    def buffered(self) -> int:
        return len(self._buffer)

    def fill(self, quantity: int) -> None:
        """Pull exactly `quantity` items from the source into the buffer.

        Raises SourceExhaustedDuringFill if the source runs out first. Items pulled
        before that happened stay in the buffer.
        """
        self._fill(quantity, strict=True)

    def fill_all(self) -> None:
        self._fill(None, strict=False)

    def fill_up_to(self, quantity: int) -> None:
        self._fill(quantity, strict=False)

    def _fill(self, quantity: Optional[int], strict: bool) -> None:
        # quantity of None means "until the source is exhausted"
        assert quantity is None or isinstance(quantity, int), f'Quantity must be an integer, got {quantity!r}'
        assert quantity is None or quantity >= 0, f'Cannot fill a negative quantity: {quantity}'
        filled = 0
        while quantity is None or filled < quantity:
            try:
                item = next(self._source)
            except StopIteration:
                if strict:
                    assert quantity is not None
                    raise SourceExhaustedDuringFill(quantity, filled) from None
                return
            self._buffer.append(item)
            filled += 1


def cache_exactly(iterable: Iterable[_T], quantity: int) -> PrefetchCache[_T]:
    cache = PrefetchCache(iterable)
    cache.fill(quantity)
    return cache


def cache_all(iterable: Iterable[_T]) -> PrefetchCache[_T]:
    cache = PrefetchCache(iterable)
    cache.fill_all()
    return cache


def cache_up_to(iterable: Iterable[_T], quantity: int) -> PrefetchCache[_T]:
    """Like cache_exactly() but a source shorter than `quantity` is not an error."""
    cache = PrefetchCache(iterable)
    cache.fill_up_to(quantity)
    return cache
