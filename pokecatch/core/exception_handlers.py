"""Global exception handlers for consistent error responses.

Every failure is rendered as ``{"message": "..."}`` with the status code of
the error type:
- AppError subclasses → their ``status_code`` (400, 401, 404, 429, 500)
- Starlette HTTPException (unknown route, wrong method) → its status
- Request validation errors (malformed JSON body) → 400
- Any other Exception → 500 with a generic message (safety net)

Request ids travel in the X-Request-ID response header, not the body.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pokecatch.core.errors import AppError, UnauthorizedAppError
from pokecatch.core.logging import get_request_id

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render a domain error with the status code bound to its type.

    Server-side errors (5xx) never expose their message; only the generic
    text is returned.
    """
    status_code = exc.status_code
    headers = dict(exc.headers or {})
    if isinstance(exc, UnauthorizedAppError):
        headers.setdefault("WWW-Authenticate", "Bearer")

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "status_code": status_code,
            "request_path": request.url.path,
            "error_details": exc.details,
            "request_id": get_request_id(),
        },
    )

    message = exc.message if status_code < 500 else INTERNAL_ERROR_MESSAGE
    return JSONResponse(
        status_code=status_code,
        content={"message": message},
        headers=headers or None,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (404 route, 405 method) as ``{message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Collapse FastAPI's 422 detail list into a single 400 message."""
    errors = exc.errors()
    fields = sorted(
        {".".join(str(part) for part in err.get("loc", ())[1:]) for err in errors} - {""}
    )

    logger.info(
        "request_validation_failed",
        extra={
            "request_path": request.url.path,
            "fields": fields,
            "error_count": len(errors),
        },
    )

    message = "Invalid request"
    if fields:
        message = f"Invalid request: {', '.join(fields)}"
    return JSONResponse(status_code=400, content={"message": message})


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors.

    Logs the exception type for debugging and returns a generic message:
    no stack traces or internal identifiers reach the client.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers on the FastAPI app.

    Example:
        >>> from fastapi import FastAPI
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(Exception)(general_exception_handler)
