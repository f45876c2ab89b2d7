import typing
from .types import *
from .buffer import BufferCapture
from .adaptors import repeat_n

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable

def source_func(data: Iterable[T]) -> Callable[[], Iterable[T]]:
    """
    a zero-argument function returning the data for every new pass.
    one-shot iterators are captured on the first pass and the buffer is reused after that.
    """
    from .enumerable import Enumerable
    if isinstance(data, Enumerable):
        return data._source_func
    if isinstance(data, Iterator):
        return BufferCapture(data).get
    return lambda: data

def from_iterable(data: Iterable[T]) -> 'Enumerable[T]':
    """create enumerable from iterable"""
    from .enumerable import Enumerable
    return Enumerable(source_func(data))

def from_range(start: int, count: int) -> 'Enumerable[int]':
    """create enumerable from range"""
    from .enumerable import Enumerable
    return Enumerable(lambda: range(start, start + max(count, 0)))

def repeat(item: T, count: int) -> 'Enumerable[T]':
    """create enumerable with repeated item"""
    from .enumerable import Enumerable
    if count < 0:
        raise ValueError("count must be non-negative")
    return Enumerable(lambda: repeat_n(item, count))

def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    from .enumerable import Enumerable
    return Enumerable(lambda: ())

# --- aliases ---
combinq = from_iterable
C = from_iterable
