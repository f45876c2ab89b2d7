from __future__ import annotations
import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Sized
from itertools import tee
from ..types import *
from ..buffer import Buffer, BufferCapture
from ..config import CaptureConfig
from ..cursors import OdometerCursor
from .base import Adaptor, BufferedAdaptor

logger = logging.getLogger(__name__)


class CartesianProduct(BufferedAdaptor[Tuple[Any, ...]]):
    """
    every m-tuple drawing one element from each source, in odometer order
    (the last source advances fastest). each source is captured independently.
    """

    def __init__(self, *sources: SequenceSource[Any], config: Optional[CaptureConfig] = None):
        super().__init__(*sources, config=config)
        self._front: Optional[OdometerCursor] = None
        self._back: Optional[OdometerCursor] = None

    def _setup(self, buffers: List[Buffer[Any]]) -> int:
        lengths = [len(b) for b in buffers]
        self._front = OdometerCursor(lengths)
        self._back = OdometerCursor(lengths, reverse=True)
        return self._front.total

    def _emit(self, indices: IndexTuple) -> Tuple[Any, ...]:
        return tuple(buffer._read(i) for buffer, i in zip(self._buffers, indices))

    def _pull_front(self) -> Tuple[Any, ...]:
        group = self._emit(self._front.current())
        self._front.advance()
        return group

    def _pull_back(self) -> Tuple[Any, ...]:
        group = self._emit(self._back.current())
        self._back.advance()
        return group


# --- self-product over a sequence of sequences ---

class _Restartable(ABC, Generic[T]):
    """
    an inner sequence that can hand out a fresh iterator from its start.
    length is the number of elements in one full pass, none until it is known.
    """
    length: Optional[int] = None

    @abstractmethod
    def fresh(self) -> Iterator[T]:
        pass


class _Reiterate(_Restartable[T]):
    """re-iterable collection: iter() already gives a fresh pass"""

    def __init__(self, inner: Iterable[T]):
        self._inner = inner
        if isinstance(inner, Sized):
            self.length = len(inner)

    def fresh(self) -> Iterator[T]:
        return iter(self._inner)


class _Tee(_Restartable[T]):
    """one-shot iterator: keep an untouched copy and split a new one off it per restart"""

    def __init__(self, inner: Iterator[T]):
        self._original = inner

    def fresh(self) -> Iterator[T]:
        self._original, copy = tee(self._original)
        return copy


def _restartable(inner: Iterable[T]) -> _Restartable[T]:
    if isinstance(inner, Iterator):
        return _Tee(inner)
    return _Reiterate(inner)


_END = object()


class MultiProduct(Adaptor[Tuple[Any, ...]]):
    """
    cartesian product of a sequence of sequences with itself.

    the outer sequence is captured like any other source. the inner sequences are
    only ever read front to back within one outer step, so they are not buffered:
    each one is restarted from a cheap duplicate whenever its position wraps.
    forward only; size_hint() bounds what is left without the len() limit.
    """

    def __init__(self, sources: SequenceSource[Iterable[Any]], config: Optional[CaptureConfig] = None):
        self._capture = BufferCapture(sources, config)
        self._slots: Optional[List[_Restartable[Any]]] = None
        self._iters: List[Iterator[Any]] = []
        self._positions: List[int] = []
        self._current: Optional[List[Any]] = None
        self._exhausted = False

    def _prepare(self) -> List[_Restartable[Any]]:
        """capture the outer sequence once and wrap every inner one"""
        if self._slots is None:
            try:
                outer = self._capture.get()
            except BaseException:
                self._exhausted = True
                raise
            self._slots = [_restartable(inner) for inner in outer]
            logger.debug(f"multi product over {len(self._slots)} inner sequences")
        return self._slots

    def _initial(self) -> Optional[List[Any]]:
        self._iters = [slot.fresh() for slot in self._prepare()]
        self._positions = [0] * len(self._iters)
        initial = []
        for it in self._iters:
            item = next(it, _END)
            if item is _END:
                # one empty inner sequence makes the whole product empty
                return None
            initial.append(item)
        return initial

    def _iterate_last(self) -> bool:
        """advance the rightmost inner sequence, carrying into the ones on its left"""
        current = self._current
        wrapped = []
        for position in reversed(range(len(self._iters))):
            item = next(self._iters[position], _END)
            if item is not _END:
                current[position] = item
                self._positions[position] += 1
                break
            wrapped.append(position)
        else:
            # every position ran out: the product is done, nothing to restart
            return False

        for position in wrapped:
            slot = self._slots[position]
            if slot.length is None:
                slot.length = self._positions[position] + 1
            it = slot.fresh()
            item = next(it, _END)
            if item is _END:
                return False
            self._iters[position] = it
            self._positions[position] = 0
            current[position] = item
        return True

    def _finish(self) -> None:
        self._exhausted = True
        self._iters = []

    def __next__(self) -> Tuple[Any, ...]:
        if self._exhausted:
            raise StopIteration
        try:
            if self._current is None:
                self._current = self._initial()
                advanced = self._current is not None
            else:
                advanced = self._iterate_last()
        except BaseException:
            # an inner sequence failed part way through a step; the state is torn
            self._finish()
            raise
        if not advanced:
            self._finish()
            raise StopIteration
        return tuple(self._current)

    def size_hint(self) -> Tuple[int, Optional[int]]:
        """
        (lower, upper) bounds on the tuples still to come, as unbounded ints.
        upper is none while an inner sequence of unknown length is involved.
        """
        if self._exhausted:
            return 0, 0
        lengths = [slot.length for slot in self._prepare()]
        if self._current is None:
            if 0 in lengths:
                return 0, 0
            if None in lengths:
                return 0, None
            return math.prod(lengths), math.prod(lengths)
        if None in lengths:
            return 0, None
        left = 0
        for length, position in zip(lengths, self._positions):
            left = left * length + (length - position - 1)
        return left, left

    def last(self, default: Any = None) -> Any:
        """
        the final tuple, reached by running each inner sequence to its end
        instead of stepping through the whole product. consumes the adaptor.
        """
        if self._exhausted:
            return default
        try:
            if self._current is None:
                lasts = []
                for slot in self._prepare():
                    item = _END
                    for item in slot.fresh():
                        pass
                    if item is _END:
                        return default
                    lasts.append(item)
                return tuple(lasts)

            lasts, moved = [], False
            for it, value in zip(self._iters, self._current):
                item = _END
                for item in it:
                    pass
                if item is _END:
                    lasts.append(value)
                else:
                    lasts.append(item)
                    moved = True
            # nothing moved: the tuple already produced was the last one
            return tuple(lasts) if moved else default
        finally:
            self._finish()


# --- factory functions ---

def cartesian_product(*sources: SequenceSource[Any],
                      config: Optional[CaptureConfig] = None) -> CartesianProduct:
    """cartesian product of independent finite sources"""
    return CartesianProduct(*sources, config=config)


def multi_cartesian_product(sources: SequenceSource[Iterable[Any]],
                            config: Optional[CaptureConfig] = None) -> MultiProduct:
    """
    cartesian product over the inner sequences of one outer sequence.
    example: multi_cartesian_product([range(2), 'ab']) -> (0,'a'), (0,'b'), (1,'a'), (1,'b')
    """
    return MultiProduct(sources, config)
