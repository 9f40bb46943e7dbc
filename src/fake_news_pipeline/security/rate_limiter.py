"""
Sliding-window rate limiter keyed by client identity.

Process-wide, in-memory state: client id -> timestamps of accepted requests
inside the rolling window. Entries older than the window are dropped lazily
on the next check for that client.
"""

import math
import threading
import time
from collections import deque
from typing import Callable

import structlog


logger = structlog.get_logger(__name__)


class SlidingWindowRateLimiter:
    """
    Allow at most `max_requests` per client within `window_seconds`.

    The read-filter-append sequence runs under a lock, so concurrent requests
    from the same client cannot push the count past the threshold.
    Rejected requests are not recorded.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize rate limiter.

        Args:
            max_requests: Requests allowed per client inside the window
            window_seconds: Length of the rolling window
            clock: Monotonic time source (injectable for tests)
        """
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

        logger.info(
            "Rate limiter initialized",
            max_requests=max_requests,
            window_seconds=window_seconds,
        )

    def _prune(self, timestamps: deque[float], now: float) -> None:
        # Timestamps are appended in order, so expired ones sit at the left
        while timestamps and now - timestamps[0] >= self.window_seconds:
            timestamps.popleft()

    def allow(self, client_id: str) -> bool:
        """
        Record a request for `client_id` if it fits in the window.

        Returns:
            True if the request is allowed, False if the client is over the limit
        """
        with self._lock:
            now = self._clock()
            timestamps = self._windows.setdefault(client_id, deque())
            self._prune(timestamps, now)

            if len(timestamps) >= self.max_requests:
                return False

            timestamps.append(now)
            return True

    def retry_after(self, client_id: str) -> int:
        """Seconds until the client's oldest request leaves the window (0 if not limited)."""
        with self._lock:
            timestamps = self._windows.get(client_id)
            if not timestamps or len(timestamps) < self.max_requests:
                return 0
            remaining = self.window_seconds - (self._clock() - timestamps[0])
            return max(0, math.ceil(remaining))

    def tracked_clients(self) -> int:
        """Number of client ids currently holding a window entry."""
        with self._lock:
            return len(self._windows)

    def reset(self) -> None:
        """Forget all windows."""
        with self._lock:
            self._windows.clear()
