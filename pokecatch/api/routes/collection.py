from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from pokecatch.api.dependencies import get_collection_service
from pokecatch.core.auth import get_current_user_id
from pokecatch.core.config import settings
from pokecatch.schemas.auth import MessageResponse
from pokecatch.schemas.collection import (
    CatchRequest,
    CatchResponse,
    CaughtListResponse,
    OwnershipOut,
    OwnershipWithCreatureOut,
)
from pokecatch.services.collection_service import CollectionService, coerce_positive_int

router = APIRouter(tags=["Collection"])

CurrentUserId = Annotated[int, Depends(get_current_user_id)]


@router.post("/catch", response_model=CatchResponse)
async def catch_pokemon(
    body: CatchRequest,
    user_id: CurrentUserId,
    service: CollectionService = Depends(get_collection_service),
) -> CatchResponse:
    """Record a new catch for the authenticated user."""
    ownership = await service.catch(user_id, body.name)
    return CatchResponse(
        message="Pokemon caught",
        data=OwnershipOut.model_validate(ownership),
    )


@router.delete("/release/{ownership_id}", response_model=MessageResponse)
async def release_pokemon(
    ownership_id: str,
    user_id: CurrentUserId,
    service: CollectionService = Depends(get_collection_service),
) -> MessageResponse:
    """Release one of the authenticated user's catches.

    Succeeds even when nothing was deleted (unknown id, another user's id,
    non-numeric id) so ownership of other ids is never revealed.
    """
    parsed_id = coerce_positive_int(ownership_id, 0)
    if parsed_id:
        await service.release(user_id, parsed_id)
    return MessageResponse(message="Pokemon released")


@router.get("/caught", response_model=CaughtListResponse)
async def list_caught_pokemon(
    user_id: CurrentUserId,
    page: Annotated[str | None, Query()] = None,
    per_page: Annotated[str | None, Query(alias="perPage")] = None,
    service: CollectionService = Depends(get_collection_service),
) -> CaughtListResponse:
    """List the authenticated user's catches, oldest first.

    Missing or invalid ``page``/``perPage`` fall back to 1 and 10.
    """
    caught = await service.list_caught(
        user_id,
        page=coerce_positive_int(page, settings.app.default_page),
        per_page=coerce_positive_int(per_page, settings.app.default_per_page),
    )
    return CaughtListResponse(
        data=[OwnershipWithCreatureOut.model_validate(item) for item in caught],
    )
