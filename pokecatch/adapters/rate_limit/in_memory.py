"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Windows are aligned to wall-clock multiples of ``window_seconds``; when a
  window ends the whole counter table is dropped, not individual keys.
- A client may therefore send ``limit`` requests at the end of one window and
  ``limit`` more right after the boundary.
"""

from __future__ import annotations

import math
import threading
import time
from typing import Callable

from pokecatch.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Counts requests per key and clears all counts at each window boundary.

    Blocked requests are still counted, so a client over the limit stays
    blocked until the table is cleared.

    All reads and writes of the counter table happen under one lock: an
    increment-and-compare never loses an update, and a clear is observed by
    every increment either entirely or not at all.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            limit: Maximum number of requests admitted per key per window.
            window_seconds: Size of the fixed window in seconds.
            clock: Time source returning UNIX time in seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {}
        self._window_start = self._window_start_for(clock())

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    def _window_start_for(self, now: float) -> int:
        return int(now // self._window_seconds) * self._window_seconds

    def _roll_window_locked(self, now: float) -> None:
        """Drop the whole table if ``now`` falls in a later window."""
        window_start = self._window_start_for(now)
        if window_start != self._window_start:
            self._counts.clear()
            self._window_start = window_start

    def consume(self, key: str) -> RateLimitResult:
        """Increment the counter for ``key`` and compare it to the limit.

        Raises:
            ValueError: If key is empty.
        """
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()

        with self._lock:
            self._roll_window_locked(now)
            count = self._counts.get(key, 0) + 1
            self._counts[key] = count
            reset_at = self._window_start + self._window_seconds

        remaining = max(0, self._limit - count)
        if count <= self._limit:
            return RateLimitResult(
                allowed=True,
                limit=self._limit,
                count=count,
                remaining=remaining,
                reset_at=reset_at,
                retry_after_seconds=None,
            )

        return RateLimitResult(
            allowed=False,
            limit=self._limit,
            count=count,
            remaining=0,
            reset_at=reset_at,
            retry_after_seconds=max(1, int(math.ceil(reset_at - now))),
        )

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()
            self._window_start = self._window_start_for(self._clock())

    def count_for(self, key: str) -> int:
        """Return the current count for ``key`` (0 when unseen)."""
        with self._lock:
            self._roll_window_locked(self._clock())
            return self._counts.get(key, 0)
