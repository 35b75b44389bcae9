"""
Village Backend — Counter SQLAlchemy Model
============================================

What:  One row per named id sequence, holding the last value handed out.
Who:   Written only by SequenceGenerator (single atomic UPDATE ... RETURNING);
       seeded by the schema migration and `init_db()`.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from village_api.database import Base

# Sequence names seeded at schema creation, one per id-managed entity
KNOWN_SEQUENCES = (
    "users",
    "announcements",
    "suggestions",
    "queries",
    "price",
    "crop",
)


class Counter(Base):
    """Last-issued integer for a named sequence."""

    __tablename__ = "counters"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    sequence_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Counter(name='{self.name}', sequence_value={self.sequence_value})>"
