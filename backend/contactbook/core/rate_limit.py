"""
Fixed-window request counter keyed by client IP
"""

import threading
import time
from typing import Callable, Dict, Tuple


class FixedWindowRateLimiter:
    """
    Allows `limit` hits per client in each `window_seconds` window.
    The window starts at a client's first hit and resets once it elapses.
    """

    def __init__(self, limit: int, window_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, client: str) -> bool:
        """Record a request; False when the client is over its limit"""
        now = self._clock()
        with self._lock:
            started, count = self._windows.get(client, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0
            count += 1
            self._windows[client] = (started, count)
            if len(self._windows) > 10000:
                self._evict(now)
            return count <= self.limit

    def retry_after(self, client: str) -> int:
        with self._lock:
            started, _ = self._windows.get(client, (self._clock(), 0))
        return max(0, int(self.window_seconds - (self._clock() - started)))

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _evict(self, now: float) -> None:
        expired = [c for c, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for client in expired:
            del self._windows[client]
