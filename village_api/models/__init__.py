"""
Village Backend — ORM Models Package
======================================

Importing this package registers every table with `Base.metadata`
(used by `init_db()` and Alembic autogenerate).
"""

from village_api.models.community import Announcement, CitizenQuery, Suggestion
from village_api.models.counter import Counter
from village_api.models.crop import Crop, Place, Price
from village_api.models.user import User

__all__ = [
    "Announcement",
    "CitizenQuery",
    "Counter",
    "Crop",
    "Place",
    "Price",
    "Suggestion",
    "User",
]
