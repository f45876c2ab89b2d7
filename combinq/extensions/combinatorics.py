import typing
import math
from itertools import chain
from ..types import *
from ..buffer import capture
from ..adaptors import (
    permutations,
    combinations,
    combinations_with_replacement,
    tuple_combinations,
    cartesian_product,
    multi_cartesian_product
)

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

class CombinatoricsAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def binomial_coefficient(self, r: int) -> int:
        """binomial coefficient n choose r, using python's optimized math.comb"""
        n = self._enumerable.to.count()
        # math.comb raises valueerror for r < 0. return 0 for consistency.
        if r < 0:
            return 0
        return math.comb(n, r)

    def permutations(self, r: Optional[int] = None) -> 'Enumerable[Tuple[T, ...]]':
        """ordered arrangements of r elements (all of them when r is none)"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: permutations(self._enumerable._source(), r))

    def combinations(self, r: int) -> 'Enumerable[Tuple[T, ...]]':
        """r-element subsets, in the order their elements appear in the source"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: combinations(self._enumerable._source(), r))

    def combinations_with_replacement(self, r: int) -> 'Enumerable[Tuple[T, ...]]':
        """
        r-element combinations where each element may be picked again.
        r may exceed the number of elements.
        """
        from ..enumerable import Enumerable
        return Enumerable(lambda: combinations_with_replacement(self._enumerable._source(), r))

    def tuple_combinations(self, group: Union[int, Type[tuple]] = 2) -> 'Enumerable[Any]':
        """combinations unpacked into a fixed-arity group (an arity or a namedtuple class)"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: tuple_combinations(self._enumerable._source(), group))

    def power_set(self) -> 'Enumerable[Tuple[T, ...]]':
        """
        generates the power set (the set of all subsets) of the sequence.
        the source is captured once and every combinations() pass shares that buffer.
        """
        from ..enumerable import Enumerable
        def power_set_data():
            buffer = capture(self._enumerable._source())
            # chain combinations of length 0, 1, 2, ..., n
            return chain.from_iterable(combinations(buffer, r) for r in range(len(buffer) + 1))

        return Enumerable(power_set_data)

    def cartesian_product(self, *others: Iterable[Any]) -> 'Enumerable[Tuple[Any, ...]]':
        """
        computes the cartesian product with other iterables.
        returns an enumerable of tuples, the last iterable varying fastest.
        """
        from ..enumerable import Enumerable
        from ..factories import source_func
        other_funcs = [source_func(o) for o in others]
        def product_data():
            return cartesian_product(self._enumerable._source(), *(f() for f in other_funcs))

        return Enumerable(product_data)

    def multi_cartesian_product(self) -> 'Enumerable[Tuple[Any, ...]]':
        """product of the inner sequences of this sequence of sequences"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: multi_cartesian_product(self._enumerable._source()))
