from __future__ import annotations
import logging
from contextlib import contextmanager
from dataclasses import dataclass, asdict, replace
from .types import *

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptureConfig:
    """configuration for turning sources into buffers"""
    zero_copy: bool = True  # wrap indexable sources instead of copying them
    eager: bool = False  # capture when the adaptor is built, not on first pull
    max_elements: Optional[int] = None  # bound on materialized elements, none = unbounded

    def __post_init__(self):
        if self.max_elements is not None and self.max_elements < 0:
            raise ValueError("max_elements must be non-negative or None")


_DEFAULT = CaptureConfig()
_current = _DEFAULT


def get_config() -> CaptureConfig:
    """the process-wide default configuration"""
    return _current


def configure(**changes: Any) -> CaptureConfig:
    """replace fields of the process-wide default, returning the new config"""
    global _current
    _current = replace(_current, **changes)
    logger.debug(f"capture config updated: {asdict(_current)}")
    return _current


def reset_config() -> CaptureConfig:
    global _current
    _current = _DEFAULT
    return _current


@contextmanager
def overrides(**changes: Any) -> Iterator[CaptureConfig]:
    """
    temporarily replace fields of the default configuration.
    example: with overrides(zero_copy=False): list(combinations(data, 2))
    """
    global _current
    previous = _current
    _current = replace(previous, **changes)
    try:
        yield _current
    finally:
        _current = previous


def resolve(config: Optional[CaptureConfig]) -> CaptureConfig:
    """an explicit per-call config wins over the process default"""
    return config if config is not None else _current
