from __future__ import annotations
import typing
from itertools import islice
from ..types import *
from ..adaptors import DoubleEndedAdaptor, rev, walk
from ..adaptors import select as select_adaptor, stride as stride_adaptor

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

class _CoreOperations(Generic[T]):
    def where(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: filter(predicate, self._source()))

    def select(self: 'Enumerable[T]', selector: Selector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form"""
        from ..enumerable import Enumerable
        # indexable sources stay double-ended, so a later reverse() needs no copy
        return Enumerable(lambda: select_adaptor(self._source(), selector))

    def take(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the first 'count' elements"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: islice(self._source(), max(count, 0)))

    def skip(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the first 'count' elements"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: islice(self._source(), max(count, 0), None))

    def stride(self: 'Enumerable[T]', step: int) -> 'Enumerable[T]':
        """every step-th element, starting with the first"""
        from ..enumerable import Enumerable
        if step < 1:
            raise ValueError("step must be a positive integer")
        return Enumerable(lambda: stride_adaptor(self._source(), step))

    def reverse(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """
        inverts the order of the elements in a sequence.
        double-ended sources are pulled from the back; anything else is captured first.
        """
        from ..enumerable import Enumerable
        def reversed_data():
            source = self._source()
            if isinstance(source, DoubleEndedAdaptor):
                return rev(source)
            return rev(walk(source))
        return Enumerable(reversed_data)
