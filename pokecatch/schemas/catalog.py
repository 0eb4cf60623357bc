"""Pydantic schemas for catalog pass-through responses."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field


class CatalogResponse(BaseModel):
    data: Dict[str, Any] = Field(
        ..., description="Catalog entry exactly as returned by the upstream API."
    )
