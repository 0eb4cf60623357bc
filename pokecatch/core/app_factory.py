"""Application factory for the FastAPI app.

Builds the request pipeline in one place:
CORS → request id → rate limit → (protected) bearer auth → handler.
Startup/shutdown of the database engine and the catalog HTTP client are
owned by the lifespan.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokecatch.adapters.catalog.factory import create_catalog_client
from pokecatch.api.routes import (
    auth_router,
    collection_router,
    health_router,
    pokemon_router,
)
from pokecatch.core.config import settings
from pokecatch.core.exception_handlers import setup_exception_handlers
from pokecatch.core.logging import configure_logging
from pokecatch.core.middleware import request_id_middleware
from pokecatch.core.openapi import TAGS_METADATA, apply_openapi_customizations
from pokecatch.core.rate_limit import rate_limit_middleware
from pokecatch.db.session import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database and catalog client; release them on shutdown."""
    db = init_db(settings.database.url, echo=settings.database.echo)
    if settings.database.create_tables:
        await db.create_all()

    app.state.catalog_client = create_catalog_client()
    logger.info(
        "app.startup",
        extra={
            "app_env": settings.app_env,
            "rate_limit_enabled": settings.app.rate_limit_enabled,
            "rate_limit_requests": settings.app.rate_limit_requests,
            "rate_limit_window_s": settings.app.rate_limit_window_seconds,
        },
    )
    try:
        yield
    finally:
        await app.state.catalog_client.aclose()
        await db.dispose()
        logger.info("app.shutdown")


def _parse_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Pokecatch API",
        description=(
            "Register, log in and keep a personal collection of caught Pokémon. "
            "Catalog data is fetched from PokeAPI. Routes under /protected "
            "require a bearer token from POST /login; every route except "
            "/health is rate limited."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        openapi_tags=TAGS_METADATA,
        lifespan=lifespan,
    )

    # Middleware (last added runs first): CORS, request id, rate limit
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_parse_origins(settings.app.cors_allow_origins),
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    setup_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(pokemon_router)
    app.include_router(collection_router, prefix="/protected")
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
