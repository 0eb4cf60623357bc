from abc import ABC, abstractmethod
from typing import Any


class AbstractCatalogClient(ABC):
	"""Interface for creature catalog lookups."""

	@abstractmethod
	async def lookup(self, name: str) -> dict[str, Any]:
		"""Fetch the catalog entry for ``name``.

		Args:
			name: Creature name as understood by the catalog.

		Returns:
			dict[str, Any]: Catalog entry, passed through unchanged.

		Raises:
			NotFoundAppError: If the entry does not exist or the upstream
				call fails for any reason.
		"""
		...

	async def aclose(self) -> None:
		"""Release any network resources held by the client."""
		return None
