"""Rate limiter interfaces.

The API depends on this abstraction, not on the in-memory implementation, so
a shared store (e.g. Redis INCR + EXPIRE) can back the counters once the
service runs as more than one process.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a consume operation.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        count: Requests seen for the key in the current window, this one included.
        remaining: Requests left in the current window (0 when blocked).
        reset_at: UNIX epoch seconds when the current window ends.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    count: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Interface for fixed-window admission control."""

    @abstractmethod
    def consume(self, key: str) -> RateLimitResult:
        """Count one request for ``key`` and decide whether it is admitted.

        Args:
            key: Caller identity (e.g. ``user:42`` or ``ip:10.0.0.1``).

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Clear every counter at once."""
        raise NotImplementedError
