"""Factory for the catalog client used by the application."""

from pokecatch.adapters.catalog.base import AbstractCatalogClient
from pokecatch.adapters.catalog.pokeapi_client import PokeAPIClient
from pokecatch.core.config import settings
from pokecatch.core.errors import ValidationAppError


def create_catalog_client() -> AbstractCatalogClient:
    """Build the catalog client from ``settings.catalog``.

    Raises:
        ValidationAppError: If the configured base URL is not http(s).
    """
    base_url = settings.catalog.base_url.strip()
    if not base_url.startswith(("http://", "https://")):
        raise ValidationAppError(
            code="catalog_invalid_base_url",
            message=f"CATALOG_BASE_URL must be an http(s) URL, got '{base_url}'",
        )

    return PokeAPIClient(
        base_url=base_url,
        timeout_seconds=settings.catalog.timeout_seconds,
    )
