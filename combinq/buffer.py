from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from collections import abc
import numpy as np
import pandas as pd
from .types import *
from .config import CaptureConfig, resolve
from .errors import CaptureLimitExceeded

logger = logging.getLogger(__name__)


# --- abstract base class ---

class Buffer(ABC, Generic[T]):
    """
    indexable, fixed-length snapshot of a sequence's elements.
    implementations either own a copy of the elements or are a zero-copy view
    over storage that is already addressable by index. both index the same way.
    """
    strategy: str = 'abstract'

    @classmethod
    def from_source(cls, source: Any, config: CaptureConfig) -> 'Buffer[T]':
        """build the buffer for a source this strategy was selected for"""
        return cls(source)

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def _read(self, index: int) -> T:
        """read one element; index is already known to be within [0, len)"""
        pass

    def __getitem__(self, index: int) -> T:
        length = len(self)
        if index < 0:
            index += length
        if not 0 <= index < length:
            raise IndexError("buffer index out of range")
        return self._read(index)

    def get(self, index: int, default: Optional[T] = None) -> Optional[T]:
        """element at index, or default when out of range"""
        if 0 <= index < len(self):
            return self._read(index)
        return default

    def pick(self, indices: Iterable[int]) -> Tuple[T, ...]:
        """gather the elements at the given (in range) indices into a tuple"""
        read = self._read
        return tuple(read(i) for i in indices)

    def __iter__(self) -> Iterator[T]:
        for i in range(len(self)):
            yield self._read(i)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strategy={self.strategy}, length={len(self)})"


# --- owned storage ---

class MaterializedBuffer(Buffer[T]):
    """owned copy of a general producer, drained exactly once"""
    strategy = 'materialize'

    def __init__(self, items: List[T]):
        # takes ownership of the list
        self._items = items

    @classmethod
    def from_source(cls, source: Iterable[T], config: CaptureConfig) -> 'MaterializedBuffer[T]':
        return cls.drain(source, config.max_elements)

    @classmethod
    def drain(cls, source: Iterable[T], limit: Optional[int] = None) -> 'MaterializedBuffer[T]':
        """
        pull every element out of the source. the buffer only exists once the
        source has ended, so a fault mid-drain never leaves a partial buffer behind.
        """
        items = []
        for item in source:
            if limit is not None and len(items) >= limit:
                raise CaptureLimitExceeded(limit)
            items.append(item)
        return cls(items)

    def __len__(self) -> int:
        return len(self._items)

    def _read(self, index: int) -> T:
        return self._items[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)


# --- zero-copy views ---

class SequenceBuffer(Buffer[T]):
    """
    zero-copy view over borrowed indexable storage (list, tuple, str, ...).
    the length is fixed at capture; the caller must not resize the storage while
    an adaptor still reads from it. use CaptureConfig(zero_copy=False) to copy instead.
    """
    strategy = 'zero-copy'

    def __init__(self, sequence: Sequence[T]):
        self._sequence = sequence
        self._length = len(sequence)

    def __len__(self) -> int:
        return self._length

    def _read(self, index: int) -> T:
        return self._sequence[index]


class RangeBuffer(Buffer[int]):
    """numeric range addressed by start/step arithmetic, no storage at all"""
    strategy = 'zero-copy'

    def __init__(self, source: range):
        self._start = source.start
        self._step = source.step
        self._length = len(source)

    def __len__(self) -> int:
        return self._length

    def _read(self, index: int) -> int:
        return self._start + index * self._step

    def pick(self, indices: Iterable[int]) -> Tuple[int, ...]:
        start, step = self._start, self._step
        return tuple(start + i * step for i in indices)


def _native(value: Any) -> Any:
    # numpy scalars become plain python values, rows and objects pass through
    return value.item() if isinstance(value, np.generic) else value


class ArrayBuffer(Buffer[Any]):
    """zero-copy view along the first axis of a numpy array"""
    strategy = 'zero-copy'

    def __init__(self, array: np.ndarray):
        if array.ndim == 0:
            raise TypeError("cannot capture a 0-d array; it has no elements to index")
        self._array = array
        self._length = array.shape[0]

    def __len__(self) -> int:
        return self._length

    def _read(self, index: int) -> Any:
        return _native(self._array[index])


class SeriesBuffer(Buffer[Any]):
    """zero-copy positional view over a pandas series, ignoring its index labels"""
    strategy = 'zero-copy'

    def __init__(self, series: pd.Series):
        self._values = series.array
        self._length = len(series)

    def __len__(self) -> int:
        return self._length

    def _read(self, index: int) -> Any:
        return _native(self._values[index])


# --- strategy selection ---

# first match wins. the generic sequence entry stays last so specific types come first.
_ZERO_COPY: List[Tuple[type, Type[Buffer]]] = [
    (range, RangeBuffer),
    (np.ndarray, ArrayBuffer),
    (pd.Series, SeriesBuffer),
    (abc.Sequence, SequenceBuffer),
]


def register_buffer(source_type: type, buffer_type: Type[Buffer]) -> None:
    """
    teach capture a zero-copy strategy for another indexable type.
    registered types are checked before the built-in ones.
    """
    if not issubclass(buffer_type, Buffer):
        raise TypeError(f"{buffer_type!r} is not a Buffer implementation")
    _ZERO_COPY.insert(0, (source_type, buffer_type))


def unregister_buffer(source_type: type) -> Type[Buffer]:
    """
    undo the most recent register_buffer() for source_type, returning the buffer
    type it mapped to. raises ValueError when the type has no registration.
    """
    for i, (registered, buffer_type) in enumerate(_ZERO_COPY):
        if registered is source_type:
            del _ZERO_COPY[i]
            return buffer_type
    raise ValueError(f"no zero-copy strategy registered for {source_type!r}")


def zero_copy_strategy(source: Any) -> Optional[Type[Buffer]]:
    """the zero-copy buffer type for a source, or none if it must be materialized"""
    for source_type, buffer_type in _ZERO_COPY:
        if isinstance(source, source_type):
            return buffer_type
    return None


def strategy_for(source: Any, config: Optional[CaptureConfig] = None) -> Type[Buffer]:
    """resolve which buffer implementation will capture this source"""
    cfg = resolve(config)
    if cfg.zero_copy:
        buffer_type = zero_copy_strategy(source)
        if buffer_type is not None:
            return buffer_type
    return MaterializedBuffer


class BufferCapture(Generic[T]):
    """
    turns a source into a buffer. the strategy is resolved when the capture is
    created; the buffer itself is built on the first get() (or right away when
    the config asks for eager capture). an existing buffer is shared as-is.
    """

    def __init__(self, source: SequenceSource[T], config: Optional[CaptureConfig] = None):
        self._config = resolve(config)
        self._source = source
        self._error: Optional[BaseException] = None
        if isinstance(source, Buffer):
            self._buffer: Optional[Buffer[T]] = source
            self._buffer_type: Type[Buffer] = type(source)
        else:
            self._buffer = None
            self._buffer_type = strategy_for(source, self._config)
        if self._config.eager:
            self.get()

    @property
    def strategy(self) -> str:
        if self._buffer is not None and self._buffer is self._source:
            return 'shared'
        return self._buffer_type.strategy

    @property
    def is_captured(self) -> bool:
        return self._buffer is not None

    def get(self) -> Buffer[T]:
        """the captured buffer, building it on first call"""
        if self._buffer is not None:
            return self._buffer
        if self._error is not None:
            # the source is partly drained; capturing again would expose a partial buffer
            raise RuntimeError("capture already failed, the source can not be captured again") from self._error

        try:
            buffer = self._buffer_type.from_source(self._source, self._config)
        except BaseException as e:
            self._error = e
            self._source = None
            logger.debug(f"capture aborted ({self._buffer_type.strategy}): {type(e).__name__}: {e}")
            raise

        logger.debug(f"captured {len(buffer)} elements via {buffer.strategy} ({self._buffer_type.__name__})")
        self._buffer = buffer
        self._source = None  # release the producer
        return buffer


def capture(source: SequenceSource[T], config: Optional[CaptureConfig] = None) -> Buffer[T]:
    """capture a source into a buffer immediately"""
    return BufferCapture(source, config).get()
