"""
In-memory sliding-window rate limiter for the admin login.
"""

import time
from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock

from psisite.settings import settings


@dataclass
class _Window:
    hits: list[float] = field(default_factory=list)
    lock: Lock = field(default_factory=Lock)


class RateLimiter:
    """Allow at most ``limit`` hits per key within ``window_seconds``."""

    def __init__(self, limit: int, window_seconds: int = 60):
        self.limit = limit
        self.window_seconds = window_seconds
        self._entries: dict[str, _Window] = defaultdict(_Window)

    def _prune(self, window: _Window, now: float) -> None:
        cutoff = now - self.window_seconds
        window.hits = [t for t in window.hits if t > cutoff]

    def is_allowed(self, key: str) -> bool:
        """Record a hit for ``key`` and say whether it is within the limit."""
        window = self._entries[key]
        now = time.monotonic()
        with window.lock:
            self._prune(window, now)
            if len(window.hits) >= self.limit:
                return False
            window.hits.append(now)
            return True

    def retry_after(self, key: str) -> int:
        """Seconds until ``key`` gets a free slot again."""
        window = self._entries[key]
        with window.lock:
            if not window.hits:
                return 0
            return max(0, int(min(window.hits) + self.window_seconds - time.monotonic()) + 1)

    def reset(self, key: str | None = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)


auth_rate_limiter = RateLimiter(limit=settings.rate_limit_auth_per_minute)
