from __future__ import annotations

from pokecatch.api.routes.auth import router as auth_router
from pokecatch.api.routes.collection import router as collection_router
from pokecatch.api.routes.health import router as health_router
from pokecatch.api.routes.pokemon import router as pokemon_router

__all__ = ["auth_router", "collection_router", "health_router", "pokemon_router"]
