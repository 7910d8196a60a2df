"""Per-caller fixed-window rate limiter (in-memory)."""
import asyncio
import time
from dataclasses import dataclass


@dataclass
class _Window:
    count: int
    start: float


class RateLimiter:
    WINDOW_SECONDS = 60.0

    def __init__(self, limit: int = 60, window_seconds: float = WINDOW_SECONDS) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._windows: dict[str, _Window] = {}
        self._lock = asyncio.Lock()

    async def hit(self, key: str) -> bool:
        """Count one request for key. Return True if allowed, False if rate-limited."""
        now = time.monotonic()

        async with self._lock:
            entry = self._windows.get(key)
            if entry is None:
                entry = self._windows[key] = _Window(count=0, start=now)
            elif now - entry.start > self.window_seconds:
                entry.count = 0
                entry.start = now

            entry.count += 1
            return entry.count <= self.limit

    async def cleanup(self) -> None:
        """Remove callers whose window has elapsed (call periodically)."""
        now = time.monotonic()
        async with self._lock:
            stale = [k for k, w in self._windows.items() if now - w.start > self.window_seconds]
            for k in stale:
                del self._windows[k]
