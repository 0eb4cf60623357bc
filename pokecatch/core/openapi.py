"""OpenAPI customization.

Adds a bearer security scheme and marks only the ``/protected`` operations
as requiring it, plus tag descriptions. Keeps documentation concerns out of
the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

PROTECTED_PREFIX = "/protected/"

TAGS_METADATA = [
    {"name": "Auth", "description": "Account registration and login."},
    {"name": "Pokemon", "description": "Read-only pass-through to the creature catalog."},
    {"name": "Collection", "description": "Catch, release and list your creatures (bearer token)."},
    {"name": "Health", "description": "Liveness and readiness checks."},
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to document bearer auth."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        components = schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        security_schemes.setdefault(
            "BearerAuth",
            {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "Token returned by POST /login.",
            },
        )

        for path, methods in schema.get("paths", {}).items():
            if not path.startswith(PROTECTED_PREFIX):
                continue
            for method_obj in methods.values():
                if isinstance(method_obj, dict):
                    method_obj["security"] = [{"BearerAuth": []}]

        tags = schema.setdefault("tags", [])
        existing = {tag.get("name") for tag in tags}
        tags.extend(tag for tag in TAGS_METADATA if tag["name"] not in existing)

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
