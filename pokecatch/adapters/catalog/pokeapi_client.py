"""PokeAPI catalog client adapter."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from pokecatch.adapters.catalog.base import AbstractCatalogClient
from pokecatch.core.errors import NotFoundAppError

logger = logging.getLogger(__name__)


class PokeAPIClient(AbstractCatalogClient):
    """Client for ``GET {base_url}/pokemon/{name}``.

    Every upstream failure (transport error, timeout, non-2xx status,
    unparseable body) is reported as NotFoundAppError. No retries.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the async HTTP client.

        Args:
            base_url: Catalog API root, e.g. "https://pokeapi.co/api/v2".
            timeout_seconds: Timeout for a lookup in seconds.
            transport: Optional transport override (tests use MockTransport).
        """
        self.client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout_seconds),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def lookup(self, name: str) -> dict[str, Any]:
        path = f"/pokemon/{quote(name, safe='')}"
        try:
            response = await self.client.get(path)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.info(
                "catalog.lookup_failed",
                extra={"creature_name": name, "upstream_status": exc.response.status_code},
            )
            raise NotFoundAppError(code="pokemon_not_found", message="Pokemon not found") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(
                "catalog.lookup_failed",
                extra={"creature_name": name, "error_type": type(exc).__name__},
            )
            raise NotFoundAppError(code="pokemon_not_found", message="Pokemon not found") from exc

        if not isinstance(data, dict):
            raise NotFoundAppError(code="pokemon_not_found", message="Pokemon not found")

        return data

    async def aclose(self) -> None:
        await self.client.aclose()
