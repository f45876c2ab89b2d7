"""
single-pass adaptors that pass elements through with a light transformation.

each one has a forward-only form and a double-ended form; the factory picks the
double-ended form when the wrapped source can itself produce from the back.
indexable sources (lists, ranges, arrays, ...) are lifted into a Walk first, so
they are reversible without being copied.
"""
from __future__ import annotations
from itertools import islice, zip_longest as itertools_zip_longest
from ..types import *
from ..buffer import Buffer, zero_copy_strategy
from ..config import CaptureConfig
from .base import Adaptor, DoubleEndedAdaptor, BufferedAdaptor


class Walk(BufferedAdaptor[T]):
    """plain double-ended iteration over a captured buffer"""

    def __init__(self, source: SequenceSource[T], config: Optional[CaptureConfig] = None):
        super().__init__(source, config=config)
        self._buffer: Optional[Buffer[T]] = None
        self._front = 0
        self._back = 0

    def _setup(self, buffers: List[Buffer[T]]) -> int:
        self._buffer = buffers[0]
        self._front, self._back = 0, len(self._buffer)
        return self._back

    def _pull_front(self) -> T:
        item = self._buffer._read(self._front)
        self._front += 1
        return item

    def _pull_back(self) -> T:
        self._back -= 1
        return self._buffer._read(self._back)


def _lift(source: Iterable[T]) -> Iterator[T]:
    """double-ended adaptors and indexable sources come back double-ended, anything else forward-only"""
    if isinstance(source, DoubleEndedAdaptor):
        return source
    if isinstance(source, Buffer) or zero_copy_strategy(source) is not None:
        return Walk(source)
    return iter(source)


# --- stride ---

class Stride(Adaptor[T]):
    """every step-th element, starting with the first"""

    def __init__(self, source: Iterator[T], step: int):
        self.step = step
        self._items = islice(source, 0, None, step)

    def __next__(self) -> T:
        return next(self._items)


class DoubleEndedStride(DoubleEndedAdaptor[T]):
    """
    stride over a double-ended source. back pulls return the last element that
    lies on the front's stride grid, discarding the off-grid tail.
    """

    def __init__(self, source: DoubleEndedAdaptor[T], step: int):
        self.step = step
        self._source = source
        self._started = False

    def _offset(self) -> int:
        # position of the next on-grid element, relative to the source's front
        return self.step - 1 if self._started else 0

    def __next__(self) -> T:
        if self._started:
            for _ in range(min(self.step - 1, self._source.remaining())):
                next(self._source)
        item = next(self._source)
        self._started = True
        return item

    def next_back(self) -> T:
        remaining = self._source.remaining()
        offset = self._offset()
        if remaining <= offset:
            raise StopIteration
        last = offset + (remaining - 1 - offset) // self.step * self.step
        for _ in range(remaining - 1 - last):
            self._source.next_back()
        return self._source.next_back()

    def remaining(self) -> int:
        remaining, offset = self._source.remaining(), self._offset()
        if remaining <= offset:
            return 0
        return (remaining - 1 - offset) // self.step + 1


# --- map ---

class Map(Adaptor[U]):
    """applies a selector to every element"""

    def __init__(self, source: Iterator[T], selector: Selector[T, U]):
        self._source = source
        self._selector = selector

    def __next__(self) -> U:
        return self._selector(next(self._source))


class DoubleEndedMap(Map[U], DoubleEndedAdaptor[U]):
    def next_back(self) -> U:
        return self._selector(self._source.next_back())

    def remaining(self) -> int:
        return self._source.remaining()


# --- flattening nested pairs ---

def _flatten(item: Any) -> Any:
    # ((a, b), c) -> (a, b, c), unfolding the head pair as deep as it nests
    if isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], tuple):
        return _flatten(item[0]) + (item[1],)
    return item


class FlatTuples(Map[Tuple[Any, ...]]):
    """
    unfolds left-nested pairs, the shape produced by pairing a pairing again,
    into one flat tuple per element. elements that are not nested pass through.
    """

    def __init__(self, source: Iterator[Any]):
        super().__init__(source, _flatten)


class DoubleEndedFlatTuples(FlatTuples, DoubleEndedMap[Tuple[Any, ...]]):
    pass


# --- bounded repeat ---

class RepeatN(DoubleEndedAdaptor[T]):
    """the same element, count times; symmetric, so always double-ended"""

    def __init__(self, element: T, count: int):
        if count < 0:
            raise ValueError("count must be non-negative")
        self.element = element
        self._remaining = count

    def __next__(self) -> T:
        if self._remaining == 0:
            raise StopIteration
        self._remaining -= 1
        return self.element

    def next_back(self) -> T:
        return next(self)

    def remaining(self) -> int:
        return self._remaining


# --- unequal-length pairing ---

class ZipLongest(Adaptor[Tuple[Any, ...]]):
    """pairs elements across sources, filling the shorter ones once they end"""

    def __init__(self, sources: List[Iterator[Any]], fillvalue: Any = None):
        self.fillvalue = fillvalue
        self._items = itertools_zip_longest(*sources, fillvalue=fillvalue)

    def __next__(self) -> Tuple[Any, ...]:
        return next(self._items)


class DoubleEndedZipLongest(DoubleEndedAdaptor[Tuple[Any, ...]]):
    """
    zip_longest over double-ended sources. from the back, only the sources as
    long as the longest one contribute an element; the others are filled, which
    mirrors how the front fills them once they have ended.
    """

    def __init__(self, sources: List[DoubleEndedAdaptor[Any]], fillvalue: Any = None):
        self.fillvalue = fillvalue
        self._sources = sources

    def __next__(self) -> Tuple[Any, ...]:
        if self.remaining() == 0:
            raise StopIteration
        return tuple(next(s) if s.remaining() else self.fillvalue for s in self._sources)

    def next_back(self) -> Tuple[Any, ...]:
        longest = self.remaining()
        if longest == 0:
            raise StopIteration
        return tuple(s.next_back() if s.remaining() == longest else self.fillvalue for s in self._sources)

    def remaining(self) -> int:
        return max((s.remaining() for s in self._sources), default=0)


# --- shared-reference iteration ---

class SharedIter(Adaptor[T]):
    """
    handle onto an iterator shared by reference. clones advance the same
    underlying sequence, so each element goes to exactly one handle.
    """

    def __init__(self, shared: Iterator[T]):
        self._shared = shared

    def __next__(self) -> T:
        return next(self._shared)

    def clone(self) -> 'SharedIter[T]':
        return type(self)(self._shared)


class DoubleEndedSharedIter(SharedIter[T], DoubleEndedAdaptor[T]):
    def next_back(self) -> T:
        return self._shared.next_back()

    def remaining(self) -> int:
        return self._shared.remaining()


# --- factory functions ---

def walk(source: SequenceSource[T], config: Optional[CaptureConfig] = None) -> Walk[T]:
    """double-ended iteration over any finite source (captured like the combinatorial adaptors)"""
    return Walk(source, config)


def stride(source: SequenceSource[T], step: int) -> Adaptor[T]:
    """every step-th element of the source"""
    if step < 1:
        raise ValueError("step must be a positive integer")
    lifted = _lift(source)
    if isinstance(lifted, DoubleEndedAdaptor):
        return DoubleEndedStride(lifted, step)
    return Stride(lifted, step)


def select(source: SequenceSource[T], selector: Selector[T, U]) -> Adaptor[U]:
    """project every element of the source"""
    lifted = _lift(source)
    if isinstance(lifted, DoubleEndedAdaptor):
        return DoubleEndedMap(lifted, selector)
    return Map(lifted, selector)


def flat_tuples(source: SequenceSource[Any]) -> Adaptor[Tuple[Any, ...]]:
    """flatten ((a, b), c) elements into (a, b, c)"""
    lifted = _lift(source)
    if isinstance(lifted, DoubleEndedAdaptor):
        return DoubleEndedFlatTuples(lifted)
    return FlatTuples(lifted)


def repeat_n(element: T, count: int) -> RepeatN[T]:
    """the element, count times"""
    return RepeatN(element, count)


def zip_longest(*sources: SequenceSource[Any], fillvalue: Any = None) -> Adaptor[Tuple[Any, ...]]:
    """zip sources of unequal length, padding the shorter ones with fillvalue"""
    lifted = [_lift(s) for s in sources]
    if lifted and all(isinstance(s, DoubleEndedAdaptor) for s in lifted):
        return DoubleEndedZipLongest(lifted, fillvalue)
    return ZipLongest(lifted, fillvalue)


def share(source: SequenceSource[T]) -> SharedIter[T]:
    """a cloneable handle onto one shared pass over the source"""
    lifted = _lift(source)
    if isinstance(lifted, DoubleEndedAdaptor):
        return DoubleEndedSharedIter(lifted)
    return SharedIter(lifted)
