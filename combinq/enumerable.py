from __future__ import annotations

from abc import ABC, abstractmethod
from .types import *

# --- core functionality ---
from .extensions.core import _CoreOperations

# --- accessors ---
from .extensions.combinatorics import CombinatoricsAccessor
from .extensions.terminal import TerminalAccessor

# --- abstract base class ---

class IEnumerable(ABC, Generic[T]):
    @abstractmethod
    def _source(self) -> Iterable[T]:
        """get a fresh iterable over the underlying data"""
        pass

# --- base enumerable implementation ---

class _BaseEnumerable(IEnumerable[T]):
    def __init__(self, source_func: Callable[[], Iterable[T]]):
        """init with a function that returns a fresh source each time it is called"""
        self._source_func = source_func

    def _source(self) -> Iterable[T]:
        # nothing is cached here: every call builds new adaptors over the data
        return self._source_func()

    def __iter__(self) -> Iterator[T]:
        return iter(self._source())

# --- main enumerable class ---

class Enumerable(
    _BaseEnumerable[T],
    _CoreOperations[T]
):
    """a lazy, re-iterable sequence with combinatorics built on captured buffers."""
    def __init__(self, source_func: Callable[[], Iterable[T]]):
        super().__init__(source_func)
        # --- initialize accessors ---
        self.comb = CombinatoricsAccessor(self)
        self.to = TerminalAccessor(self)

    def __repr__(self) -> str:
        return f"Enumerable({self._source_func!r})"
