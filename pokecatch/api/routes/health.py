from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from pokecatch.db.session import get_db_manager

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint.

    Reports 200 when the database answers and 503 otherwise, so load
    balancers can take an instance without storage out of rotation.
    """

    database_ok = await get_db_manager().health_check()
    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={
            "status": "ok" if database_ok else "degraded",
            "database": "ok" if database_ok else "unavailable",
        },
    )
