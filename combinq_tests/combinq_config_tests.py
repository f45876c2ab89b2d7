import logging
from dataclasses import FrozenInstanceError
import suite
from combinq import (
    CaptureConfig, get_config, configure, reset_config, overrides,
    BufferCapture, MaterializedBuffer, capture, combinations, C
)

# --- setup ---
test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

# --- helpers ---

class RecordingHandler(logging.Handler):
    """keeps every record it receives"""
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []
    def emit(self, record):
        self.records.append(record)

def recording(logger_name):
    """attach a recording handler at debug level; returns (handler, detach)"""
    logger = logging.getLogger(logger_name)
    handler = RecordingHandler()
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    def detach():
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
    return handler, detach


# --- defaults ---

@test("the default config captures lazily with zero-copy views and no limit")
def test_defaults():
    reset_config()
    config = get_config()
    assert_that(config == CaptureConfig(), "the process default starts as CaptureConfig()")
    assert_that(config.zero_copy and not config.eager and config.max_elements is None, "default field values")


@test("configs are frozen and validate their limit")
def test_frozen_config():
    config = CaptureConfig()
    with assert_raises(FrozenInstanceError):
        config.eager = True
    with assert_raises(ValueError):
        CaptureConfig(max_elements=-1)
    assert_that(CaptureConfig(max_elements=0).max_elements == 0, "a zero limit is allowed")


# --- process-wide default ---

@test("configure replaces the default until reset")
def test_configure_and_reset():
    try:
        updated = configure(zero_copy=False)
        assert_that(get_config() is updated and not updated.zero_copy, "configure installs the new default")
        assert_that(isinstance(capture([1, 2]), MaterializedBuffer), "new captures follow the default")
        configure(max_elements=10)
        assert_that(not get_config().zero_copy and get_config().max_elements == 10, "changes accumulate")
    finally:
        reset_config()
    assert_that(get_config() == CaptureConfig(), "reset restores the built-in default")
    with assert_raises(TypeError):
        configure(no_such_field=True)


@test("overrides apply inside the block and are restored afterwards, even on error")
def test_overrides():
    reset_config()
    with overrides(eager=True) as config:
        assert_that(config.eager and get_config() is config, "the override is the active default")
        assert_that(BufferCapture(x for x in [1]).is_captured, "captures inside the block are eager")
    assert_that(not get_config().eager, "the default is restored after the block")

    with assert_raises(KeyError):
        with overrides(zero_copy=False):
            raise KeyError('inside')
    assert_that(get_config().zero_copy, "the default is restored after an exception")


@test("an explicit per-call config wins over the default")
def test_per_call_config():
    with overrides(zero_copy=False):
        assert_that(BufferCapture([1], CaptureConfig()).strategy == 'zero-copy', "explicit config wins")
        assert_that(BufferCapture([1]).strategy == 'materialize', "no config falls back to the default")


@test("the config an adaptor was built with stays in force after the default changes")
def test_config_bound_at_construction():
    with overrides(max_elements=2):
        combs = combinations((x for x in range(5)), 2)
    assert_that(get_config().max_elements is None, "the default is back to unbounded")
    with assert_raises(ValueError):
        next(combs)


# --- logging ---

@test("capture logs the strategy it used at debug level")
def test_capture_logging():
    handler, detach = recording('combinq.buffer')
    try:
        capture(x for x in 'abc')
        C([1, 2, 3]).comb.combinations(2).to.list()
    finally:
        detach()
    messages = [r.getMessage() for r in handler.records]
    assert_that(all(r.levelno == logging.DEBUG for r in handler.records), "capture only logs at debug level")
    assert_that(any('captured 3 elements via materialize' in m for m in messages), "materialized capture is logged")
    assert_that(any('via zero-copy' in m for m in messages), "zero-copy capture is logged")


@test("a failed capture is logged before the error propagates")
def test_failure_logging():
    def broken():
        yield 1
        raise OSError('disk went away')

    handler, detach = recording('combinq')
    try:
        combs = combinations(broken(), 2)
        with assert_raises(OSError):
            next(combs)
    finally:
        detach()
    messages = [r.getMessage() for r in handler.records]
    assert_that(any('capture aborted' in m and 'OSError' in m for m in messages), "buffer layer logs the abort")
    assert_that(any('exhausted after failed capture' in m for m in messages), "adaptor logs its exhaustion")


# --- run the suite ---
if __name__ == "__main__":
    suite.run(title="combinq configuration test")
