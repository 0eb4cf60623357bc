"""Stateless session tokens.

Tokens are HS256 JWTs carrying only ``sub`` (the user id, as a string) and
``exp``. Nothing is stored server-side, so a token stays valid until it
expires; there is no revocation.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

import jwt

from pokecatch.core.config import settings
from pokecatch.core.errors import UnauthorizedAppError

logger = logging.getLogger(__name__)


class TokenService:
    """Issues and verifies signed, time-bounded session tokens."""

    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        ttl_seconds: int = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("secret must be a non-empty string")
        if ttl_seconds < 1:
            raise ValueError("ttl_seconds must be >= 1")

        self._secret = secret
        self._algorithm = algorithm
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def issue(self, user_id: int) -> str:
        """Mint a token for ``user_id`` expiring ``ttl_seconds`` from now."""
        expires_at = int(self._clock()) + self._ttl_seconds
        payload = {"sub": str(user_id), "exp": expires_at}
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> int:
        """Return the user id encoded in ``token``.

        Raises:
            UnauthorizedAppError: If the token is malformed, carries a bad
                signature, lacks ``sub``/``exp`` or has expired.
        """
        if not token:
            raise UnauthorizedAppError(code="missing_token", message="Unauthorized")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "require": ["sub", "exp"],
                    "verify_exp": False,
                    "verify_aud": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.InvalidTokenError as exc:
            logger.info("token.invalid", extra={"reason": type(exc).__name__})
            raise UnauthorizedAppError(code="invalid_token", message="Unauthorized") from exc

        # Expiry is checked against the injected clock, not wall time
        expires_at = payload["exp"]
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            logger.info("token.invalid", extra={"reason": "non_numeric_expiry"})
            raise UnauthorizedAppError(code="invalid_token", message="Unauthorized")
        if expires_at <= self._clock():
            logger.info("token.expired")
            raise UnauthorizedAppError(code="token_expired", message="Unauthorized")

        try:
            return int(payload["sub"])
        except (TypeError, ValueError) as exc:
            logger.info("token.invalid", extra={"reason": "non_numeric_subject"})
            raise UnauthorizedAppError(code="invalid_token", message="Unauthorized") from exc


_token_service: TokenService | None = None
_token_service_config: tuple[str, str, int] | None = None


def get_token_service() -> TokenService:
    """Return the process-wide token service.

    Rebuilt when auth settings change (primarily in tests).
    """

    global _token_service, _token_service_config

    config = (
        settings.auth.jwt_secret,
        settings.auth.jwt_algorithm,
        settings.auth.token_ttl_seconds,
    )
    if _token_service is None or _token_service_config != config:
        _token_service = TokenService(
            secret=settings.auth.jwt_secret,
            algorithm=settings.auth.jwt_algorithm,
            ttl_seconds=settings.auth.token_ttl_seconds,
        )
        _token_service_config = config

    return _token_service
