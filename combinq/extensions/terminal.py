from __future__ import annotations
import typing
from collections import abc
import numpy as np
import pandas as pd
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

class TerminalAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def list(self) -> List[T]:
        """convert to list"""
        return list(self._enumerable._source())

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self.list())

    def set(self) -> Set[T]:
        """convert to set"""
        return set(self._enumerable._source())

    def pandas(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self.list())

    def df(self, columns: Optional[List[str]] = None) -> pd.DataFrame:
        """convert to pandas dataframe, one row per element (tuples spread over columns)"""
        return pd.DataFrame(self.list(), columns=columns)

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements. sized sources and exact-size adaptors are counted without iterating."""
        from ..adaptors import DoubleEndedAdaptor, MultiProduct
        source = self._enumerable._source()
        if predicate is None:
            if isinstance(source, DoubleEndedAdaptor):
                return source.remaining()
            if isinstance(source, MultiProduct):
                lower, upper = source.size_hint()
                if lower == upper:
                    return lower
            if isinstance(source, abc.Sized):
                return len(source)
            return sum(1 for _ in source)
        return sum(1 for x in source if predicate(x))

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition"""
        source = self._enumerable._source()
        if predicate is None:
            return next(iter(source), _MISSING) is not _MISSING
        return any(predicate(x) for x in source)

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition"""
        return all(predicate(x) for x in self._enumerable._source())

    def first(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get first element"""
        for item in self._enumerable._source():
            if predicate is None or predicate(item):
                return item
        if predicate is None:
            raise ValueError("sequence contains no elements")
        raise ValueError("no element satisfies the condition")

    def first_or_default(self, predicate: Optional[Predicate[T]] = None,
                         default: Optional[T] = None) -> Optional[T]:
        """get first element or default"""
        try: return self.first(predicate)
        except ValueError: return default


_MISSING = object()
