"""Creature ORM: shared catalog entry, one row per distinct name.

Rows are created lazily by the first catch of a name and never deleted.
The unique constraint on name is what makes find-or-create safe under
concurrent first catches.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pokecatch.db.base import Base


class Creature(Base):
    __tablename__ = "pokemon"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"Creature(id={self.id!r}, name={self.name!r})"
