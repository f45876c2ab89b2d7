from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    List, Tuple, Set, Type, Sequence
)

T = TypeVar('T')
U = TypeVar('U')

Predicate = Callable[[T], bool]
Selector = Callable[[T], U]

# a producer of elements; anything iter() accepts
SequenceSource = Iterable[T]

# positions into a buffer, as handed out by a cursor
IndexTuple = Tuple[int, ...]
