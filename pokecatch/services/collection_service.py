"""Collection management: catching, releasing and listing creatures.

Creatures are shared across users and created on first catch; ownership
rows belong to exactly one user. All queries touching ownership rows are
filtered by the acting user's id.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pokecatch.core.errors import InternalAppError
from pokecatch.models import Creature, Ownership

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10

# Largest value an INTEGER column (and bound parameter) can hold
MAX_DB_INTEGER = 2**63 - 1


def coerce_positive_int(value: Any, default: int) -> int:
    """Parse ``value`` as a positive integer, falling back to ``default``.

    Missing, non-numeric, zero, negative and out-of-range (above
    ``MAX_DB_INTEGER``) inputs all collapse to the default instead of
    failing the request.

    Examples:
        >>> coerce_positive_int("3", 1)
        3
        >>> coerce_positive_int("abc", 10)
        10
        >>> coerce_positive_int(None, 1)
        1
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return number if 1 <= number <= MAX_DB_INTEGER else default


class CollectionService:
    """Per-user collection operations on top of an async session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _find_creature(self, name: str) -> Creature | None:
        result = await self._session.execute(select(Creature).where(Creature.name == name))
        return result.scalar_one_or_none()

    async def find_or_create_creature(self, name: str) -> Creature:
        """Return the creature called ``name``, creating it if needed.

        If a concurrent catch inserts the same name first, the unique
        constraint rejects our insert and we read back the winner's row.
        """
        creature = await self._find_creature(name)
        if creature is not None:
            return creature

        self._session.add(Creature(name=name))
        try:
            await self._session.commit()
            logger.info("collection.creature_created", extra={"creature_name": name})
        except IntegrityError:
            await self._session.rollback()
            logger.info("collection.creature_create_conflict", extra={"creature_name": name})

        creature = await self._find_creature(name)
        if creature is None:
            raise InternalAppError(
                code="creature_missing",
                message="Internal Server Error",
                details={"context": {"creature_name": name}},
            )
        return creature

    async def catch(self, user_id: int, name: str) -> Ownership:
        """Record a new catch of ``name`` by ``user_id``.

        Always inserts a new ownership row, even for a species the user
        already owns.
        """
        creature = await self.find_or_create_creature(name)

        ownership = Ownership(user_id=user_id, pokemon_id=creature.id)
        self._session.add(ownership)
        await self._session.commit()

        logger.info(
            "collection.catch",
            extra={
                "user_id": user_id,
                "ownership_id": ownership.id,
                "creature_id": creature.id,
            },
        )
        return ownership

    async def release(self, user_id: int, ownership_id: int) -> int:
        """Delete ownership ``ownership_id`` if it belongs to ``user_id``.

        Returns the number of deleted rows. Callers report success either
        way so that other users' ids are not revealed.
        """
        if not 1 <= ownership_id <= MAX_DB_INTEGER:
            return 0

        result = await self._session.execute(
            delete(Ownership).where(
                Ownership.id == ownership_id,
                Ownership.user_id == user_id,
            )
        )
        await self._session.commit()

        deleted = result.rowcount or 0
        logger.info(
            "collection.release",
            extra={"user_id": user_id, "ownership_id": ownership_id, "deleted": deleted},
        )
        return deleted

    async def list_caught(
        self,
        user_id: int,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> list[Ownership]:
        """Return one page of the user's catches, oldest first.

        Ordered by creation time then id, so repeated calls without writes
        in between return the same page.
        """
        page = max(page, 1)
        per_page = min(max(per_page, 1), MAX_DB_INTEGER)
        offset = (page - 1) * per_page
        if offset > MAX_DB_INTEGER:
            return []

        result = await self._session.execute(
            select(Ownership)
            .where(Ownership.user_id == user_id)
            .options(selectinload(Ownership.pokemon))
            .order_by(Ownership.created_at.asc(), Ownership.id.asc())
            .offset(offset)
            .limit(per_page)
        )
        return list(result.scalars().all())
