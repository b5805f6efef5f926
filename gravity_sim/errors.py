"""Error taxonomy, diagnostic events and error rate limiting."""

import time
from collections import deque
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Callable, Deque, Dict, Hashable, Optional


class PhysicsError(Exception):
    """Base class for errors raised by the physics engine."""
    pass


class DivisionByZeroError(PhysicsError, ZeroDivisionError):
    """Raised when a vector is divided by an exact zero scalar."""
    pass


class ConfigurationError(PhysicsError, ValueError):
    """Raised for invalid bodies or simulation settings."""
    pass


class ErrorKind(str, Enum):
    """Kinds of recoverable errors surfaced by the engine."""
    NUMERIC_OVERFLOW = "numeric_overflow"
    DIVISION_BY_ZERO = "division_by_zero"
    CONFIGURATION_INCONSISTENCY = "configuration_inconsistency"
    INTEGRATOR_FAILURE = "integrator_failure"


SWITCH_TO_VERLET = "Switch to the verlet integrator or reduce the time step."


@dataclass(frozen=True)
class PhysicsErrorEvent:
    """Non-fatal diagnostic produced while advancing the simulation.

    Carries enough structure (kind, offending body, message) for a host
    application to render or log it.
    """
    kind: ErrorKind
    message: str
    body_id: Optional[Hashable] = None
    integrator: Optional[str] = None
    suggestion: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data

class ErrorRateLimiter:
    """Suppresses repeated error reports.

    A report is suppressed when the same kind and message prefix was
    reported less than ``cooldown`` seconds ago, or when more than
    ``burst_threshold`` reports went through in the last ``burst_window``
    seconds.
    """

    MESSAGE_KEY_LENGTH = 100

    def __init__(
        self,
        cooldown: float = 5.0,
        burst_threshold: int = 5,
        burst_window: float = 10.0,
        clock: Callable[[], float] = time.monotonic
    ):
        """Initialize rate limiter.

        Args:
            cooldown: Seconds before an identical report is allowed again
            burst_threshold: Reports allowed per burst window before everything is muted
            burst_window: Sliding window (seconds) over which reports are counted
            clock: Monotonic time source (injectable for tests)
        """
        self.cooldown = cooldown
        self.burst_threshold = burst_threshold
        self.burst_window = burst_window
        self.clock = clock
        self._last_reported: Dict[str, float] = {}
        self._recent: Deque[float] = deque()

    def should_report(self, kind, message: str) -> bool:
        """Return True if the report should go through, recording it if so."""
        kind_value = kind.value if isinstance(kind, ErrorKind) else str(kind)
        key = f"{kind_value}:{message[:self.MESSAGE_KEY_LENGTH]}"
        now = self.clock()
        self._expire(now)

        if len(self._recent) > self.burst_threshold:
            return False
        if key in self._last_reported:
            return False

        self._last_reported[key] = now
        self._recent.append(now)
        return True

    def _expire(self, now: float):
        while self._recent and now - self._recent[0] >= self.burst_window:
            self._recent.popleft()
        stale = [key for key, last in self._last_reported.items() if now - last >= self.cooldown]
        for key in stale:
            del self._last_reported[key]

    def reset(self):
        """Forget all recorded reports."""
        self._last_reported.clear()
        self._recent.clear()
