from __future__ import annotations

from fastapi import APIRouter, Depends

from pokecatch.adapters.catalog.base import AbstractCatalogClient
from pokecatch.api.dependencies import get_catalog_client
from pokecatch.schemas.catalog import CatalogResponse

router = APIRouter(tags=["Pokemon"])


@router.get("/pokemon/{name}", response_model=CatalogResponse)
async def get_pokemon(
    name: str,
    catalog: AbstractCatalogClient = Depends(get_catalog_client),
) -> CatalogResponse:
    """Look up a creature in the external catalog.

    Any upstream failure is reported as 404.
    """
    entry = await catalog.lookup(name)
    return CatalogResponse(data=entry)
