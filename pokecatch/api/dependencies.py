"""Service providers injected into route handlers via Depends()."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from pokecatch.adapters.catalog.base import AbstractCatalogClient
from pokecatch.core.config import settings
from pokecatch.db.session import get_db
from pokecatch.services.collection_service import CollectionService
from pokecatch.services.credential_service import CredentialService
from pokecatch.services.token_service import TokenService, get_token_service


def get_catalog_client(request: Request) -> AbstractCatalogClient:
    """Return the catalog client opened by the application lifespan."""
    return request.app.state.catalog_client


async def get_credential_service(
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> CredentialService:
    return CredentialService(
        db,
        token_service,
        bcrypt_rounds=settings.auth.bcrypt_rounds,
    )


async def get_collection_service(
    db: AsyncSession = Depends(get_db),
) -> CollectionService:
    return CollectionService(db)
