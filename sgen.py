r'''
.------..------..------..------.
|s.--. ||g.--. ||e.--. ||n.--. |
| :/\: || :/\: || (\/) || :(): |
| :\/: || :\/: || :\/: || ()() |
| '--'s|| '--'g|| '--'e|| '--'n|
`------'`------'`------'`------'
'''

import numpy as np
import pandas as pd
from faker import Faker
from typing import Any, Dict, Iterator, List, Optional, Tuple


# every shape of source the capture layer distinguishes
SOURCE_KINDS = ('list', 'tuple', 'range', 'generator', 'array', 'series', 'dict_keys')


class SourceGenerator:
    """builds sequence sources of every capture kind, filled with faker values."""

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            Faker.seed(seed)
            self._rng = np.random.default_rng(seed)
        else:
            self._rng = np.random.default_rng()

    def _resolve_faker_method(self, method_name: str, kwargs: Dict = {}) -> Any:
        try:
            method = getattr(self._fake.unique, method_name)
            return method(**kwargs)
        except AttributeError:
            raise ValueError(f"faker has no provider '{method_name}'")

    def values(self, n: int, provider: str = 'word', kwargs: Dict = {}) -> List[Any]:
        """n distinct values from a faker provider"""
        # distinct values keep value-level assertions equivalent to index-level ones
        self._fake.unique.clear()
        return [self._resolve_faker_method(provider, kwargs) for _ in range(n)]

    def values_for(self, kind: str, n: int, provider: str = 'word') -> List[Any]:
        """values a source of this kind can hold; a range can only hold 0..n-1"""
        if kind == 'range':
            return list(range(n))
        return self.values(n, provider)

    def source(self, kind: str, n: int, provider: str = 'word') -> Any:
        """a new source of the given kind holding n elements"""
        return source_from(kind, self.values_for(kind, n, provider))

    def sizes(self, low: int, high: int) -> Tuple[int, int]:
        """a random (n, k) pair with both ends inclusive"""
        n, k = self._rng.integers(low, high, size=2, endpoint=True)
        return int(n), int(k)

    def cases(self, count: int, max_n: int = 6, kinds: Tuple[str, ...] = SOURCE_KINDS) -> Iterator[Tuple[str, int, int]]:
        """count random (kind, n, k) triples; k may exceed n"""
        for _ in range(count):
            kind = kinds[int(self._rng.integers(0, len(kinds)))]
            n, k = self.sizes(0, max_n)
            yield kind, n, k


def source_from(kind: str, values: List[Any]) -> Any:
    """
    wrap values in a new source of the given kind.
    'range' expects values to be 0..n-1 and rebuilds them as range(n).
    """
    if kind == 'range':
        return range(len(values))
    if kind == 'list':
        return list(values)
    if kind == 'tuple':
        return tuple(values)
    if kind == 'generator':
        return (v for v in values)
    if kind == 'array':
        return np.array(values)
    if kind == 'series':
        return pd.Series(values)
    if kind == 'dict_keys':
        return dict.fromkeys(values).keys()
    raise ValueError(f"unknown source kind: '{kind}'")


def from_seed(seed: Optional[int] = None) -> SourceGenerator:
    return SourceGenerator(seed)
