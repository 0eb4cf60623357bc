"""Registration and login.

Passwords are hashed with bcrypt (salted, slow) before storage and compared
with ``bcrypt.checkpw``, which is constant time with respect to the candidate.
Both calls are CPU-bound, so they run in a worker thread to keep the event
loop serving other requests.
"""

from __future__ import annotations

import asyncio
import logging

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pokecatch.core.errors import (
    DuplicateEmailAppError,
    InvalidCredentialsAppError,
    NotFoundAppError,
    ValidationAppError,
)
from pokecatch.models import User
from pokecatch.services.token_service import TokenService

logger = logging.getLogger(__name__)

# bcrypt ignores (or rejects, depending on version) input past 72 bytes
BCRYPT_MAX_PASSWORD_BYTES = 72


def _encode_password(password: str) -> bytes:
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationAppError(
            code="password_too_long",
            message=f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes",
        )
    return encoded


def hash_password(password: str, *, rounds: int = 10) -> str:
    """Hash ``password`` with a fresh salt."""
    return bcrypt.hashpw(_encode_password(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check ``password`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode_password(password), hashed_password.encode("utf-8"))
    except ValidationAppError:
        return False


class CredentialService:
    """Credential store operations on top of an async session."""

    def __init__(
        self,
        session: AsyncSession,
        token_service: TokenService,
        *,
        bcrypt_rounds: int = 10,
    ) -> None:
        self._session = session
        self._tokens = token_service
        self._bcrypt_rounds = bcrypt_rounds

    async def register(self, email: str, password: str) -> User:
        """Create a user.

        Uniqueness is left to the database constraint rather than checked
        beforehand, so two concurrent registrations cannot both succeed.

        Raises:
            DuplicateEmailAppError: If the email is already registered.
        """
        hashed = await asyncio.to_thread(hash_password, password, rounds=self._bcrypt_rounds)
        user = User(email=email, hashed_password=hashed)
        self._session.add(user)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            logger.info("auth.register.duplicate_email")
            raise DuplicateEmailAppError(
                code="duplicate_email",
                message="Email already exists",
            ) from exc

        logger.info("auth.register.success", extra={"user_id": user.id})
        return user

    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def login(self, email: str, password: str) -> str:
        """Authenticate and return a session token.

        Raises:
            NotFoundAppError: If no user has this email.
            InvalidCredentialsAppError: If the password does not match.
        """
        user = await self.get_by_email(email)
        if user is None:
            logger.info("auth.login.unknown_email")
            raise NotFoundAppError(code="user_not_found", message="User not found")

        matches = await asyncio.to_thread(verify_password, password, user.hashed_password)
        if not matches:
            logger.warning("auth.login.invalid_credentials", extra={"user_id": user.id})
            raise InvalidCredentialsAppError(
                code="invalid_credentials",
                message="Invalid credentials",
            )

        logger.info("auth.login.success", extra={"user_id": user.id})
        return self._tokens.issue(user.id)
