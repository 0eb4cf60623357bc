"""User ORM: registered account holding login credentials.

Invariants:
    - email is unique and stored exactly as submitted (case-sensitive)
    - hashed_password is a bcrypt hash; the raw password is never persisted
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pokecatch.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    hashed_password: Mapped[str] = mapped_column(String(128), nullable=False)

    caught: Mapped[list["Ownership"]] = relationship(
        "Ownership", back_populates="user", cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!r})"
