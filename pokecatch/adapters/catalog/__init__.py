"""Catalog adapter layer - abstracts over the external creature catalog."""

from pokecatch.adapters.catalog.base import AbstractCatalogClient
from pokecatch.adapters.catalog.factory import create_catalog_client
from pokecatch.adapters.catalog.pokeapi_client import PokeAPIClient

__all__ = [
    "AbstractCatalogClient",
    "PokeAPIClient",
    "create_catalog_client",
]
