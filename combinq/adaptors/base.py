from __future__ import annotations
import logging
from abc import abstractmethod
from ..types import *
from ..buffer import Buffer, BufferCapture
from ..config import CaptureConfig
from ..errors import NotReversibleError

logger = logging.getLogger(__name__)


# --- capabilities ---

class Adaptor(Iterator[T]):
    """pull-based producer: every next() yields an element or ends the sequence"""

    @abstractmethod
    def __next__(self) -> T:
        pass


class DoubleEndedAdaptor(Adaptor[T]):
    """
    capability for adaptors with a well-defined back end.
    front and back pulls never produce the same element twice; when the two ends
    meet, both directions are exhausted. remaining() is the number of elements not
    yet produced from either end, as an unbounded int; len() reports the same
    number but, like every len(), only while it fits in an index-sized integer.
    """

    @abstractmethod
    def next_back(self) -> T:
        """produce the next element from the back, raising StopIteration when none is left"""
        pass

    @abstractmethod
    def remaining(self) -> int:
        """elements left between the front and the back"""
        pass

    def __len__(self) -> int:
        return self.remaining()

    def __bool__(self) -> bool:
        return self.remaining() > 0

    def __reversed__(self) -> 'DoubleEndedAdaptor[T]':
        return Rev(self)


class Rev(DoubleEndedAdaptor[T]):
    """reversed view: the wrapped adaptor's back becomes this view's front"""

    def __init__(self, inner: DoubleEndedAdaptor[T]):
        self._inner = inner

    def __next__(self) -> T:
        return self._inner.next_back()

    def next_back(self) -> T:
        return next(self._inner)

    def remaining(self) -> int:
        return self._inner.remaining()

    def __reversed__(self) -> DoubleEndedAdaptor[T]:
        # reversing twice hands back the original adaptor
        return self._inner

    def __repr__(self) -> str:
        return f"Rev({self._inner!r})"


def rev(adaptor: DoubleEndedAdaptor[T]) -> DoubleEndedAdaptor[T]:
    """reversed view of a double-ended adaptor"""
    if not isinstance(adaptor, DoubleEndedAdaptor):
        raise NotReversibleError(f"{type(adaptor).__name__} cannot produce elements from the back")
    return reversed(adaptor)


# --- buffer-backed adaptors ---

class BufferedAdaptor(DoubleEndedAdaptor[T]):
    """
    base for adaptors that read their elements out of captured buffers.

    each source gets its own capture; buffers are built on the first pull from
    either end. subclasses build their cursors in _setup() and report how many
    elements they will produce in total; a shared remaining count keeps front and
    back pulls from overlapping. a source failing mid-capture propagates its error
    and leaves the adaptor permanently exhausted.
    """

    def __init__(self, *sources: SequenceSource[Any], config: Optional[CaptureConfig] = None):
        self._captures = [BufferCapture(source, config) for source in sources]
        self._buffers: Optional[List[Buffer[Any]]] = None
        self._remaining = 0
        self._exhausted = False

    def _ready(self) -> bool:
        """capture on first use. False once the adaptor can never produce again."""
        if self._buffers is None and not self._exhausted:
            try:
                buffers = [c.get() for c in self._captures]
            except BaseException:
                self._exhausted = True
                self._captures = []
                logger.debug(f"{type(self).__name__} exhausted after failed capture")
                raise
            self._buffers = buffers
            self._remaining = self._setup(buffers)
        return not self._exhausted

    @abstractmethod
    def _setup(self, buffers: List[Buffer[Any]]) -> int:
        """build cursor state for the captured buffers, returning the total element count"""
        pass

    @abstractmethod
    def _pull_front(self) -> T:
        pass

    @abstractmethod
    def _pull_back(self) -> T:
        pass

    def __next__(self) -> T:
        if not self._ready() or self._remaining == 0:
            self._exhausted = True
            raise StopIteration
        self._remaining -= 1
        return self._pull_front()

    def next_back(self) -> T:
        if not self._ready() or self._remaining == 0:
            self._exhausted = True
            raise StopIteration
        self._remaining -= 1
        return self._pull_back()

    def remaining(self) -> int:
        return self._remaining if self._ready() else 0

    def __repr__(self) -> str:
        state = 'pending' if self._buffers is None else f"remaining={self._remaining}"
        return f"{type(self).__name__}({state})"
