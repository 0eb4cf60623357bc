"""Rate limiting middleware for the FastAPI app.

Wires the rate limiting adapter into the HTTP layer. It runs as app-level
middleware, so every request except the health check is counted: unknown
paths, malformed bodies and unauthenticated calls included. Admission is
decided before routing, body parsing and token verification.

Rate limiting strategy:
- Fixed-window limit per caller, windows cleared wholesale.
- Callers presenting a valid bearer token are keyed by user id.
- Everyone else is keyed by client IP, a coarse and spoofable proxy.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import Request, Response

from pokecatch.adapters.rate_limit.base import AbstractRateLimiter
from pokecatch.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from pokecatch.core.auth import extract_bearer_token
from pokecatch.core.config import settings
from pokecatch.core.errors import RateLimitedAppError, UnauthorizedAppError
from pokecatch.core.exception_handlers import app_error_handler
from pokecatch.services.token_service import get_token_service

logger = logging.getLogger(__name__)

# Probed by load balancers; never counted against a caller
EXEMPT_PATHS = frozenset({"/health"})

_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide rate limiter instance.

    Cached in-module so counters survive across requests. Rebuilt when the
    limit or window changes (primarily in tests).
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_seconds,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = InMemoryFixedWindowRateLimiter(
            limit=settings.app.rate_limit_requests,
            window_seconds=settings.app.rate_limit_window_seconds,
        )
        _limiter_config = config

    return _limiter


def build_rate_limit_key(request: Request, authorization: str | None) -> str:
    """Build the limiter key for the current request.

    Token verification here is only used to pick the key; an invalid token
    falls back to the IP key and is rejected later by the auth dependency.
    """

    token = extract_bearer_token(authorization)
    if token:
        try:
            return f"user:{get_token_service().verify(token)}"
        except UnauthorizedAppError:
            pass

    client_host = request.client.host if request.client else "unknown"
    return f"ip:{client_host}"


def _hash_limiter_key(key: str) -> str:
    """Hash the key for logging without exposing client addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def enforce_rate_limit(request: Request) -> None:
    """Consume one unit of the caller's budget.

    Raises:
        RateLimitedAppError: 429 once the caller exceeds the window budget.
    """

    if not settings.app.rate_limit_enabled:
        return

    limiter = get_rate_limiter()
    key = build_rate_limit_key(request, request.headers.get("Authorization"))
    key_type = key.split(":", 1)[0]

    result = limiter.consume(key)
    if result.allowed:
        logger.debug(
            "rate_limit.allowed",
            extra={
                "key_type": key_type,
                "key_hash": _hash_limiter_key(key),
                "remaining": result.remaining,
            },
        )
        return

    retry_after = result.retry_after_seconds or 0
    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_type": key_type,
            "key_hash": _hash_limiter_key(key),
            "limit": result.limit,
            "count": result.count,
            "window_s": settings.app.rate_limit_window_seconds,
            "retry_after_s": retry_after,
        },
    )

    headers: dict[str, str] | None = None
    if settings.app.rate_limit_include_headers:
        headers = {
            "Retry-After": str(retry_after),
            "X-RateLimit-Limit": str(result.limit),
            "X-RateLimit-Remaining": str(result.remaining),
            "X-RateLimit-Reset": str(result.reset_at),
        }

    raise RateLimitedAppError(
        code="rate_limited",
        message="Too Many Requests",
        details={"limit": result.limit, "retry_after": retry_after},
        headers=headers,
    )


async def rate_limit_middleware(request: Request, call_next) -> Response:
    """Reject over-budget requests with 429 before they reach a route.

    Usage:
        app.middleware("http")(rate_limit_middleware)
    """

    if request.url.path in EXEMPT_PATHS:
        return await call_next(request)

    try:
        enforce_rate_limit(request)
    except RateLimitedAppError as exc:
        # Middleware sits outside the exception handlers, so render here
        return await app_error_handler(request, exc)

    return await call_next(request)
