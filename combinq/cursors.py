"""
position state for the combinatorial adaptors.

every cursor walks its index tuples in lexicographic order, either forward
from the first valid state or, with reverse=True, backward from the last one.
exhaustion is terminal: once advance() returns False it keeps returning False.
"""
from __future__ import annotations
import math
from abc import ABC, abstractmethod
from .types import *


class Cursor(ABC):
    """mutable position state driving an adaptor's enumeration order"""

    def __init__(self, reverse: bool = False):
        self.reverse = reverse
        self._exhausted = False
        self.total = 0

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def current(self) -> IndexTuple:
        """the index tuple at the current position"""
        if self._exhausted:
            raise IndexError("cursor is exhausted")
        return self._current()

    def advance(self) -> bool:
        """step to the next state. returns False once the cursor is exhausted."""
        if not self._exhausted and not self._step():
            self._exhausted = True
        return not self._exhausted

    def __iter__(self) -> Iterator[IndexTuple]:
        while not self._exhausted:
            yield self._current()
            self.advance()

    @abstractmethod
    def _current(self) -> IndexTuple:
        pass

    @abstractmethod
    def _step(self) -> bool:
        """move one state in this cursor's direction; False when there is none"""
        pass


class PermutationCursor(Cursor):
    """
    k-permutations of n indices via the cycle table algorithm.
    the table emits index tuples in lexicographic order. reverse order is the
    same walk over mirrored labels (i -> n - 1 - i).
    """

    def __init__(self, n: int, k: int, reverse: bool = False):
        super().__init__(reverse)
        self.n = n
        self.k = k
        self._indices = list(range(n))
        self._cycles = list(range(n, n - k, -1))
        self._exhausted = k < 0 or k > n
        self.total = 0 if self._exhausted else math.perm(n, k)

    def _current(self) -> IndexTuple:
        head = self._indices[:self.k]
        if self.reverse:
            last = self.n - 1
            return tuple(last - i for i in head)
        return tuple(head)

    def _step(self) -> bool:
        n, indices, cycles = self.n, self._indices, self._cycles
        for i in reversed(range(self.k)):
            cycles[i] -= 1
            if cycles[i] == 0:
                # rotate position i to the end and reset its cycle
                indices[i:] = indices[i + 1:] + indices[i:i + 1]
                cycles[i] = n - i
            else:
                j = cycles[i]
                indices[i], indices[-j] = indices[-j], indices[i]
                return True
        return False


class CombinationCursor(Cursor):
    """strictly increasing k-tuples of indices in [0, n)"""

    def __init__(self, n: int, k: int, reverse: bool = False):
        super().__init__(reverse)
        self.n = n
        self.k = k
        self._exhausted = k < 0 or k > n
        if reverse:
            self._indices = [n - k + i for i in range(max(k, 0))]
        else:
            self._indices = list(range(max(k, 0)))
        self.total = 0 if self._exhausted else math.comb(n, k)

    def _current(self) -> IndexTuple:
        return tuple(self._indices)

    def _step(self) -> bool:
        return self._retreat() if self.reverse else self._increment()

    def _increment(self) -> bool:
        a, n, k = self._indices, self.n, self.k
        for i in reversed(range(k)):
            # position i can reach at most n - k + i and still leave room on its right
            if a[i] < n - k + i:
                a[i] += 1
                for j in range(i + 1, k):
                    a[j] = a[j - 1] + 1
                return True
        return False

    def _retreat(self) -> bool:
        a, n, k = self._indices, self.n, self.k
        for i in reversed(range(k)):
            floor = a[i - 1] + 1 if i else 0
            if a[i] > floor:
                a[i] -= 1
                for j in range(i + 1, k):
                    a[j] = n - k + j
                return True
        return False


class ReplacementCursor(Cursor):
    """non-decreasing k-tuples of indices in [0, n); k may exceed n"""

    def __init__(self, n: int, k: int, reverse: bool = False):
        super().__init__(reverse)
        self.n = n
        self.k = k
        self._exhausted = k < 0 or (n == 0 and k > 0)
        self._indices = [n - 1 if reverse else 0] * max(k, 0)
        if self._exhausted:
            self.total = 0
        elif n == 0:
            self.total = 1  # only the empty tuple
        else:
            self.total = math.comb(n + k - 1, k)

    def _current(self) -> IndexTuple:
        return tuple(self._indices)

    def _step(self) -> bool:
        return self._retreat() if self.reverse else self._increment()

    def _increment(self) -> bool:
        a, top = self._indices, self.n - 1
        for i in reversed(range(self.k)):
            if a[i] < top:
                a[i] += 1
                for j in range(i + 1, self.k):
                    a[j] = a[i]
                return True
        return False

    def _retreat(self) -> bool:
        a, top = self._indices, self.n - 1
        for i in reversed(range(self.k)):
            floor = a[i - 1] if i else 0
            if a[i] > floor:
                a[i] -= 1
                for j in range(i + 1, self.k):
                    a[j] = top
                return True
        return False


class OdometerCursor(Cursor):
    """one independent index per buffer; the rightmost position turns fastest"""

    def __init__(self, lengths: Sequence[int], reverse: bool = False):
        super().__init__(reverse)
        self.lengths = tuple(lengths)
        self._exhausted = any(length == 0 for length in self.lengths)
        if reverse:
            self._indices = [length - 1 for length in self.lengths]
        else:
            self._indices = [0] * len(self.lengths)
        self.total = 0 if self._exhausted else math.prod(self.lengths)

    def _current(self) -> IndexTuple:
        return tuple(self._indices)

    def _step(self) -> bool:
        a, lengths = self._indices, self.lengths
        for i in reversed(range(len(a))):
            if self.reverse:
                if a[i] > 0:
                    a[i] -= 1
                    return True
                a[i] = lengths[i] - 1
            else:
                if a[i] < lengths[i] - 1:
                    a[i] += 1
                    return True
                a[i] = 0
            # wrapped: carry into the next position to the left
        return False
