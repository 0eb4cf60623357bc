"""ORM models. Importing this package registers every table on Base.metadata."""

from pokecatch.models.creature import Creature
from pokecatch.models.ownership import Ownership
from pokecatch.models.user import User

__all__ = ["Creature", "Ownership", "User"]
