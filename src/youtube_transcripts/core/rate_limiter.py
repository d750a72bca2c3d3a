"""Fixed-window rate limiting."""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .config import config
from .exceptions import RateLimitedError
from ..utils.logging import get_logger

logger = get_logger("rate_limiter")

Clock = Callable[[], float]


@dataclass
class RateWindow:
    window_start: float
    count: int = 0


def _admit(window: RateWindow, now: float, max_requests: int, window_seconds: float) -> bool:
    if now - window.window_start > window_seconds:
        window.window_start = now
        window.count = 0
    window.count += 1
    return window.count <= max_requests


class RateLimiter:
    """
    Process-wide call counter over a fixed time window.

    Every check counts, admitted or not; the window restarts on the first
    check after it has elapsed.
    """

    def __init__(
        self,
        max_requests: Optional[int] = None,
        window_seconds: Optional[float] = None,
        clock: Clock = time.monotonic
    ):
        self.max_requests = max_requests if max_requests is not None else config.rate_limit.max_requests
        self.window_seconds = window_seconds if window_seconds is not None else config.rate_limit.window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._window = RateWindow(window_start=clock())

    def allow(self) -> bool:
        with self._lock:
            return _admit(self._window, self._clock(), self.max_requests, self.window_seconds)

    def check(self) -> None:
        """Raise RateLimitedError when the current window is exhausted."""
        if not self.allow():
            logger.warning(f"Rate limit exceeded ({self.max_requests} per {self.window_seconds:g}s)")
            raise RateLimitedError()


class KeyedRateLimiter:
    """One window per caller key, typically the client IP address."""

    def __init__(
        self,
        max_requests: Optional[int] = None,
        window_seconds: Optional[float] = None,
        clock: Clock = time.monotonic
    ):
        self.max_requests = max_requests if max_requests is not None else config.rate_limit.max_requests
        self.window_seconds = window_seconds if window_seconds is not None else config.rate_limit.window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: Dict[str, RateWindow] = {}

    def allow(self, key: str) -> bool:
        with self._lock:
            now = self._clock()
            self._prune(now)
            window = self._windows.setdefault(key, RateWindow(window_start=now))
            return _admit(window, now, self.max_requests, self.window_seconds)

    def _prune(self, now: float) -> None:
        stale = [k for k, w in self._windows.items() if now - w.window_start > self.window_seconds]
        for key in stale:
            del self._windows[key]
