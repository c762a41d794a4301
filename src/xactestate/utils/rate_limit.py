"""
In-memory Rate Limiter

Fixed-window request counting per identifier (client IP, email, ...).
State lives in the process, so each worker counts separately.

Usage:
    from xactestate.utils.rate_limit import get_rate_limiter, RATE_LIMITS

    result = get_rate_limiter().check_preset(client_ip, "contact")
    if not result.success:
        ...
"""

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from xactestate.core.models import RateLimitResult
from xactestate.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RateLimitRule:
    """Maximum number of requests allowed per time window."""

    max_requests: int
    window_seconds: int


# Preset rules for common use cases
RATE_LIMITS: Dict[str, RateLimitRule] = {
    "auth": RateLimitRule(5, 60),
    "register": RateLimitRule(3, 300),
    "contact": RateLimitRule(3, 300),
    "estimate": RateLimitRule(2, 3600),
    "translate": RateLimitRule(10, 60),
    "upload": RateLimitRule(20, 300),
    "message": RateLimitRule(5, 60),
    "api": RateLimitRule(60, 60),
}

CLEANUP_INTERVAL: float = 5 * 60


@dataclass
class _Window:
    count: int
    reset_time: float


class RateLimiter:
    """Thread-safe fixed-window rate limiter."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()
        self._last_cleanup = clock()

    def check(self, identifier: str, max_requests: int, window_seconds: int) -> RateLimitResult:
        """Count a request for ``identifier`` and report whether it is allowed."""
        now = self._clock()
        with self._lock:
            if now - self._last_cleanup >= CLEANUP_INTERVAL:
                self._cleanup_locked(now)

            window = self._windows.get(identifier)
            if window is None or now > window.reset_time:
                self._windows[identifier] = _Window(1, now + window_seconds)
                return RateLimitResult(True, max_requests - 1, window_seconds)

            reset_in = math.ceil(window.reset_time - now)
            if window.count >= max_requests:
                logger.debug("Rate limit hit for %s", identifier)
                return RateLimitResult(False, 0, reset_in)

            window.count += 1
            return RateLimitResult(True, max_requests - window.count, reset_in)

    def check_preset(self, identifier: str, preset: str) -> RateLimitResult:
        """Check ``identifier`` against a named rule from ``RATE_LIMITS``."""
        rule = RATE_LIMITS[preset]
        return self.check(f"{preset}:{identifier}", rule.max_requests, rule.window_seconds)

    def cleanup(self) -> int:
        """Drop expired windows. Returns the number removed."""
        with self._lock:
            return self._cleanup_locked(self._clock())

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _cleanup_locked(self, now: float) -> int:
        expired = [key for key, w in self._windows.items() if now > w.reset_time]
        for key in expired:
            del self._windows[key]
        self._last_cleanup = now
        return len(expired)

    def __len__(self) -> int:
        return len(self._windows)


_limiter: Optional[RateLimiter] = None


def get_rate_limiter() -> RateLimiter:
    """Get the process-wide rate limiter."""
    global _limiter
    if _limiter is None:
        _limiter = RateLimiter()
    return _limiter


def get_client_ip(headers: Mapping[str, str], remote_addr: Optional[str] = None) -> str:
    """Resolve the client IP from proxy headers.

    Uses the first ``X-Forwarded-For`` entry, then ``X-Real-IP``, then the
    socket address; ``"unknown"`` when none is available.
    """
    forwarded = headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    return remote_addr or "unknown"
