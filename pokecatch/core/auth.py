"""Bearer token authentication for /protected routes.

The dependency resolves the acting user id from ``Authorization: Bearer
<token>``. Any failure (missing header, wrong scheme, bad signature,
expired token) is reported the same way: 401 Unauthorized.

Usage:
    @router.get("/caught")
    async def caught(user_id: Annotated[int, Depends(get_current_user_id)]):
        ...
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Header

from pokecatch.core.errors import UnauthorizedAppError
from pokecatch.services.token_service import TokenService, get_token_service

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token part of a ``Bearer <token>`` header value.

    Examples:
        >>> extract_bearer_token("Bearer abc.def.ghi")
        'abc.def.ghi'
        >>> extract_bearer_token("Basic dXNlcjpwdw==") is None
        True
        >>> extract_bearer_token(None) is None
        True
    """
    if not authorization:
        return None

    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None

    token = token.strip()
    return token or None


async def get_current_user_id(
    authorization: Annotated[str | None, Header()] = None,
    token_service: TokenService = Depends(get_token_service),
) -> int:
    """FastAPI dependency returning the verified user id.

    Raises:
        UnauthorizedAppError: 401 if the header is missing or the token is
            not valid.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        logger.info("auth.missing_token", extra={"header_present": authorization is not None})
        raise UnauthorizedAppError(code="missing_token", message="Unauthorized")

    return token_service.verify(token)
