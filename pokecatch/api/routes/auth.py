from __future__ import annotations

from fastapi import APIRouter, Depends

from pokecatch.api.dependencies import get_credential_service
from pokecatch.schemas.auth import Credentials, LoginResponse, MessageResponse
from pokecatch.services.credential_service import CredentialService

router = APIRouter(tags=["Auth"])


@router.post("/register", response_model=MessageResponse)
async def register(
    body: Credentials,
    service: CredentialService = Depends(get_credential_service),
) -> MessageResponse:
    """Create an account.

    Returns 400 when the email is already registered.
    """
    user = await service.register(body.email, body.password)
    return MessageResponse(message=f"{user.email} created successfully")


@router.post("/login", response_model=LoginResponse)
async def login(
    body: Credentials,
    service: CredentialService = Depends(get_credential_service),
) -> LoginResponse:
    """Exchange email and password for a bearer token.

    Returns 404 for an unknown email and 401 for a wrong password.
    """
    token = await service.login(body.email, body.password)
    return LoginResponse(message="Login successful", token=token)
