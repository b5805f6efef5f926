"""Tests for error events and the rate limiter."""

import pytest
from gravity_sim.errors import (
    ConfigurationError, DivisionByZeroError, ErrorKind, ErrorRateLimiter, PhysicsError, PhysicsErrorEvent,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0
    
    def __call__(self):
        return self.now


def test_exception_hierarchy():
    """Test exception base classes."""
    assert issubclass(DivisionByZeroError, ZeroDivisionError)
    assert issubclass(ConfigurationError, ValueError)
    assert issubclass(ConfigurationError, PhysicsError)


def test_event_to_dict():
    """Test event serialization."""
    event = PhysicsErrorEvent(
        kind=ErrorKind.NUMERIC_OVERFLOW,
        message="too fast",
        body_id="earth",
        integrator="euler",
        timestamp=12.0,
    )
    data = event.to_dict()
    assert data["kind"] == "numeric_overflow"
    assert data["body_id"] == "earth"
    assert data["integrator"] == "euler"
    assert data["timestamp"] == 12.0


def test_repeat_suppressed_within_cooldown():
    """Test identical reports are muted during the cooldown."""
    clock = FakeClock()
    limiter = ErrorRateLimiter(clock=clock)
    assert limiter.should_report(ErrorKind.INTEGRATOR_FAILURE, "boom")
    clock.now = 4.9
    assert not limiter.should_report(ErrorKind.INTEGRATOR_FAILURE, "boom")
    clock.now = 5.0
    assert limiter.should_report(ErrorKind.INTEGRATOR_FAILURE, "boom")


def test_different_messages_are_independent():
    """Test distinct reports do not mute each other."""
    limiter = ErrorRateLimiter(clock=FakeClock())
    assert limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, "a")
    assert limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, "b")
    assert limiter.should_report(ErrorKind.INTEGRATOR_FAILURE, "a")


def test_key_uses_message_prefix():
    """Test reports are keyed on the message prefix."""
    limiter = ErrorRateLimiter(clock=FakeClock())
    prefix = "x" * 100
    assert limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, prefix + "first")
    assert not limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, prefix + "second")


def test_burst_mutes_everything():
    """Test a burst of reports mutes everything."""
    clock = FakeClock()
    limiter = ErrorRateLimiter(clock=clock)
    for i in range(6):
        assert limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, f"msg {i}")
    
    clock.now = 1.0
    assert not limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, "fresh")
    
    clock.now = 10.0
    assert limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, "fresh")


def test_burst_after_quiet_period_is_muted():
    """Test a late burst is muted too."""
    clock = FakeClock()
    limiter = ErrorRateLimiter(clock=clock)
    assert limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, "startup")
    
    clock.now = 100.0
    passed = [limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, f"late {i}") for i in range(20)]
    assert sum(passed) == 6
    assert all(passed[:6])
    
    clock.now = 109.9
    assert not limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, "still muted")
    clock.now = 110.0
    assert limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, "still muted")


def test_expired_reports_are_forgotten():
    """Test old reports are dropped."""
    clock = FakeClock()
    limiter = ErrorRateLimiter(clock=clock)
    for i in range(3):
        limiter.should_report(ErrorKind.INTEGRATOR_FAILURE, f"body {i}")
    clock.now = 60.0
    limiter.should_report(ErrorKind.INTEGRATOR_FAILURE, "body 0")
    assert len(limiter._last_reported) == 1
    assert len(limiter._recent) == 1


def test_reset_forgets_reports():
    """Test reset."""
    limiter = ErrorRateLimiter(clock=FakeClock())
    assert limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, "boom")
    limiter.reset()
    assert limiter.should_report(ErrorKind.NUMERIC_OVERFLOW, "boom")


def test_configure_logging_adds_single_handler():
    """Test logging setup is idempotent."""
    import logging
    from gravity_sim.utils.log import configure_logging
    
    logger = configure_logging(logging.DEBUG)
    configure_logging(logging.DEBUG)
    try:
        tagged = [h for h in logger.handlers if getattr(h, "_gravity_sim", False)]
        assert len(tagged) == 1
        assert logger.level == logging.DEBUG
    finally:
        for handler in tagged:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
