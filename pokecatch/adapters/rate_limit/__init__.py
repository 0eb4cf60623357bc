"""Rate limiting adapters.

The service starts with a per-process in-memory limiter; a shared store can
be added behind ``AbstractRateLimiter`` without touching the API layer.
"""

from pokecatch.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from pokecatch.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemoryFixedWindowRateLimiter",
    "RateLimitResult",
]
