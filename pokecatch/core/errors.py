"""Application-level exception types.

Every failure the API reports is an ``AppError`` subclass. The HTTP status is
a property of the error type, so services raise domain errors and the
exception handlers decide nothing beyond rendering them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for logs. Never rendered to clients."""

    hint: str
    limit: int
    retry_after: int
    upstream_status: int
    operation: str
    context: dict[str, Any]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable message returned to the client.
        details: Optional structured details for logging.
        headers: Optional response headers (e.g. Retry-After).
    """

    code: str
    message: str
    details: ErrorDetails | None = None
    headers: dict[str, str] | None = None

    status_code: ClassVar[int] = 500

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when a request body or parameter is malformed."""

    status_code = 400


class DuplicateEmailAppError(AppError):
    """Raised when registering an email that already exists."""

    status_code = 400


class NotFoundAppError(AppError):
    """Raised when a user or catalog entry does not exist."""

    status_code = 404


class InvalidCredentialsAppError(AppError):
    """Raised when a password does not match the stored hash."""

    status_code = 401


class UnauthorizedAppError(AppError):
    """Raised when a bearer token is missing, malformed, forged or expired."""

    status_code = 401


class RateLimitedAppError(AppError):
    """Raised when a client exceeds its request budget for the window."""

    status_code = 429


class InternalAppError(AppError):
    """Raised for unexpected server-side failures."""


class DatabaseAppError(InternalAppError):
    """Raised when the persistence layer fails."""
