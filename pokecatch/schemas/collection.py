"""Pydantic schemas for the caught-creature collection."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CatchRequest(BaseModel):
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Creature name as known by the catalog (e.g. 'pikachu').",
    )


class CreatureOut(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    name: str


class OwnershipOut(BaseModel):
    """A single catch event owned by the requesting user.

    Serialized in camelCase (``userId``, ``pokemonId``, ``createdAt``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    user_id: int
    pokemon_id: int
    created_at: datetime


class OwnershipWithCreatureOut(OwnershipOut):
    pokemon: CreatureOut


class CatchResponse(BaseModel):
    message: str
    data: OwnershipOut


class CaughtListResponse(BaseModel):
    data: List[OwnershipWithCreatureOut] = Field(
        default_factory=list,
        description="Catches ordered by creation time, oldest first.",
    )
