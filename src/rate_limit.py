# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""In-process sliding window rate limiter."""

import time
from collections import deque
from collections.abc import Callable
from threading import Lock


class SlidingWindowRateLimiter:
    """Counts hits per key over a trailing time window.

    State lives in this process only; each worker keeps its own counts. Keys
    whose hits have all left the window are dropped, at most once per window,
    so idle clients do not accumulate.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = Lock()
        self._last_sweep = clock()

    @property
    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._hits)

    def _sweep(self, now: float, window_seconds: float) -> None:
        stale = [
            key
            for key, hits in self._hits.items()
            if not hits or now - hits[-1] >= window_seconds
        ]
        for key in stale:
            del self._hits[key]
        self._last_sweep = now

    def hit(self, key: str, limit: int, window_seconds: float) -> tuple[bool, float]:
        """Record a hit for ``key``.

        Returns:
            ``(allowed, retry_after)``; ``retry_after`` is the number of
            seconds until the oldest hit leaves the window, 0 when allowed
        """
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= window_seconds:
                self._sweep(now, window_seconds)
            hits = self._hits.setdefault(key, deque())
            while hits and now - hits[0] >= window_seconds:
                hits.popleft()
            if len(hits) >= limit:
                return False, window_seconds - (now - hits[0])
            hits.append(now)
            return True, 0.0

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = self._clock()


rate_limiter = SlidingWindowRateLimiter()
