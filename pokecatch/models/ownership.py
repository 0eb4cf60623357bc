"""Ownership ORM: one catch event linking a user to a creature.

Invariants:
    - Every catch inserts a new row; a user may own the same creature many times
    - Rows are only ever deleted by their owner (release filters on user_id)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pokecatch.db.base import Base
from pokecatch.models.creature import Creature


class Ownership(Base):
    __tablename__ = "caught_pokemon"
    __table_args__ = (
        Index("ix_caught_pokemon_user_created", "user_id", "created_at", "id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    pokemon_id: Mapped[int] = mapped_column(
        ForeignKey("pokemon.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship("User", back_populates="caught")
    pokemon: Mapped[Creature] = relationship(Creature, lazy="raise")

    def __repr__(self) -> str:
        return (
            f"Ownership(id={self.id!r}, user_id={self.user_id!r}, "
            f"pokemon_id={self.pokemon_id!r})"
        )
