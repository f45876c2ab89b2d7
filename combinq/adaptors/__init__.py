from .base import Adaptor, DoubleEndedAdaptor, BufferedAdaptor, Rev, rev
from .combinatorics import (
    Permutations,
    Combinations,
    CombinationsWithReplacement,
    TupleCombinations,
    permutations,
    combinations,
    combinations_with_replacement,
    tuple_combinations
)
from .product import CartesianProduct, MultiProduct, cartesian_product, multi_cartesian_product
from .passthrough import (
    Walk,
    Stride,
    DoubleEndedStride,
    Map,
    DoubleEndedMap,
    FlatTuples,
    DoubleEndedFlatTuples,
    RepeatN,
    ZipLongest,
    DoubleEndedZipLongest,
    SharedIter,
    DoubleEndedSharedIter,
    walk,
    stride,
    select,
    flat_tuples,
    repeat_n,
    zip_longest,
    share
)
