r"""
'    _____ ____  __  __ ____ _____ _   _  ___
'   / ____/ __ \|  \/  |  _ \_   _| \ | |/ _ \
'  | |   | |  | | \  / | |_) || | |  \| | | | |
'  | |   | |  | | |\/| |  _ < | | | . ` | | | |
'  | |___| |__| | |  | | |_) || |_| |\  | |_| |
'   \_____\____/|_|  |_|____/_____|_| \_|\__\_\
"""

# expose the combinatorial and pass-through adaptors
from .adaptors import (
    Adaptor,
    DoubleEndedAdaptor,
    Rev,
    rev,
    Permutations,
    Combinations,
    CombinationsWithReplacement,
    TupleCombinations,
    CartesianProduct,
    MultiProduct,
    permutations,
    combinations,
    combinations_with_replacement,
    tuple_combinations,
    cartesian_product,
    multi_cartesian_product,
    walk,
    stride,
    select,
    flat_tuples,
    repeat_n,
    zip_longest,
    share
)

# expose buffer capture
from .buffer import (
    Buffer,
    BufferCapture,
    MaterializedBuffer,
    SequenceBuffer,
    RangeBuffer,
    ArrayBuffer,
    SeriesBuffer,
    capture,
    register_buffer,
    unregister_buffer
)

# expose configuration and errors
from .config import CaptureConfig, get_config, configure, reset_config, overrides
from .errors import NotReversibleError, CaptureLimitExceeded

# expose the fluent surface
from .enumerable import Enumerable
from .factories import (
    from_iterable,
    from_range,
    repeat,
    empty,
    combinq,
    C
)

# define what `import *` does
__all__ = [
    "Adaptor",
    "DoubleEndedAdaptor",
    "Rev",
    "rev",
    "Permutations",
    "Combinations",
    "CombinationsWithReplacement",
    "TupleCombinations",
    "CartesianProduct",
    "MultiProduct",
    "permutations",
    "combinations",
    "combinations_with_replacement",
    "tuple_combinations",
    "cartesian_product",
    "multi_cartesian_product",
    "walk",
    "stride",
    "select",
    "flat_tuples",
    "repeat_n",
    "zip_longest",
    "share",
    "Buffer",
    "BufferCapture",
    "MaterializedBuffer",
    "SequenceBuffer",
    "RangeBuffer",
    "ArrayBuffer",
    "SeriesBuffer",
    "capture",
    "register_buffer",
    "unregister_buffer",
    "CaptureConfig",
    "get_config",
    "configure",
    "reset_config",
    "overrides",
    "NotReversibleError",
    "CaptureLimitExceeded",
    "Enumerable",
    "from_iterable",
    "from_range",
    "repeat",
    "empty",
    "combinq",
    "C"
]
