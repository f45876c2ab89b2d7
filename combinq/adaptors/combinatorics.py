from __future__ import annotations
from abc import abstractmethod
from ..types import *
from ..buffer import Buffer
from ..config import CaptureConfig
from ..cursors import (
    Cursor, PermutationCursor, CombinationCursor, ReplacementCursor
)
from .base import BufferedAdaptor


class _IndexedAdaptor(BufferedAdaptor[Tuple[T, ...]]):
    """
    one buffer, two cursors: the front cursor starts at the lexicographically
    first index tuple, the back cursor at the last one and walks backward.
    """

    def __init__(self, source: SequenceSource[T], k: Optional[int],
                 config: Optional[CaptureConfig] = None):
        super().__init__(source, config=config)
        self.k = k
        self._buffer: Optional[Buffer[T]] = None
        self._front: Optional[Cursor] = None
        self._back: Optional[Cursor] = None

    @abstractmethod
    def _cursor(self, n: int, k: int, reverse: bool) -> Cursor:
        pass

    def _setup(self, buffers: List[Buffer[T]]) -> int:
        self._buffer = buffers[0]
        n = len(self._buffer)
        k = n if self.k is None else self.k
        self._front = self._cursor(n, k, reverse=False)
        self._back = self._cursor(n, k, reverse=True)
        return self._front.total

    def _emit(self, indices: IndexTuple) -> Tuple[T, ...]:
        return self._buffer.pick(indices)

    def _pull_front(self) -> Tuple[T, ...]:
        group = self._emit(self._front.current())
        self._front.advance()
        return group

    def _pull_back(self) -> Tuple[T, ...]:
        group = self._emit(self._back.current())
        self._back.advance()
        return group


class Permutations(_IndexedAdaptor[T]):
    """
    every ordered arrangement of k distinct elements, chosen by position.
    n!/(n-k)! tuples in lexicographic index order. k=None means k=n; k > n yields nothing.
    """

    def _cursor(self, n: int, k: int, reverse: bool) -> Cursor:
        return PermutationCursor(n, k, reverse)


class Combinations(_IndexedAdaptor[T]):
    """every strictly increasing k-tuple of positions, C(n, k) in lexicographic order"""

    def __init__(self, source: SequenceSource[T], k: int, config: Optional[CaptureConfig] = None):
        super().__init__(source, k, config)

    def _cursor(self, n: int, k: int, reverse: bool) -> Cursor:
        return CombinationCursor(n, k, reverse)


class CombinationsWithReplacement(_IndexedAdaptor[T]):
    """
    every non-decreasing k-tuple of positions, C(n + k - 1, k) in lexicographic order.
    positions may repeat, so k > n is still valid.
    """

    def __init__(self, source: SequenceSource[T], k: int, config: Optional[CaptureConfig] = None):
        super().__init__(source, k, config)

    def _cursor(self, n: int, k: int, reverse: bool) -> Cursor:
        return ReplacementCursor(n, k, reverse)


class TupleCombinations(Combinations[T]):
    """
    combinations whose size is fixed by the output group: an int arity yields
    plain tuples, a namedtuple class yields instances of it (k = number of fields).
    """

    def __init__(self, source: SequenceSource[T], group: Union[int, Type[tuple]] = 2,
                 config: Optional[CaptureConfig] = None):
        if isinstance(group, bool):
            raise TypeError("group must be an arity or a namedtuple class")
        if isinstance(group, int):
            arity, make = group, tuple
        elif isinstance(group, type) and issubclass(group, tuple) and hasattr(group, '_fields'):
            arity, make = len(group._fields), group._make
        else:
            raise TypeError("group must be an arity or a namedtuple class")
        super().__init__(source, arity, config)
        self.group = group
        self._make = make

    def _emit(self, indices: IndexTuple) -> Any:
        read = self._buffer._read
        return self._make(read(i) for i in indices)


# --- factory functions ---

def permutations(source: SequenceSource[T], k: Optional[int] = None,
                 config: Optional[CaptureConfig] = None) -> Permutations[T]:
    """k-permutations of a finite source"""
    return Permutations(source, k, config)


def combinations(source: SequenceSource[T], k: int,
                 config: Optional[CaptureConfig] = None) -> Combinations[T]:
    """k-combinations of a finite source"""
    return Combinations(source, k, config)


def combinations_with_replacement(source: SequenceSource[T], k: int,
                                  config: Optional[CaptureConfig] = None) -> CombinationsWithReplacement[T]:
    """k-combinations of a finite source, each element usable any number of times"""
    return CombinationsWithReplacement(source, k, config)


def tuple_combinations(source: SequenceSource[T], group: Union[int, Type[tuple]] = 2,
                       config: Optional[CaptureConfig] = None) -> TupleCombinations[T]:
    """
    combinations unpacked into fixed-arity groups.
    example: tuple_combinations(points, Segment) yields Segment(start, end) for every pair.
    """
    return TupleCombinations(source, group, config)
