"""Persistence wiring: declarative base and async session management."""

from pokecatch.db.base import Base
from pokecatch.db.session import DatabaseSessionManager, get_db, get_db_manager, init_db

__all__ = [
    "Base",
    "DatabaseSessionManager",
    "get_db",
    "get_db_manager",
    "init_db",
]
