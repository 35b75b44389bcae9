"""
Village Backend — Sequence Generator
======================================

What:  Hands out the next integer id for a named sequence ("users", "crop", ...).
Who:   Called by every service that creates an entity, before the insert.
How:   One statement per call, in its own short transaction:

           UPDATE counters
              SET sequence_value = sequence_value + 1
            WHERE name = :name
        RETURNING sequence_value

Guarantees:
    - Atomic increment-and-fetch. The database's row lock serializes
      concurrent callers on the same name, so N concurrent calls receive
      N distinct, contiguous values. There is no read-then-write pair that
      two callers could interleave.
    - No auto-creation. A missing counter row makes the UPDATE match nothing;
      that raises SequenceNotInitializedError and leaves the table untouched.
    - Ids are consumed, never returned. The increment commits before the
      caller inserts its entity, so a failed insert (duplicate key, lost
      connection) leaves a gap in the id space. There is no reuse and no reset.
"""

import logging

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from village_api.database import async_session_factory
from village_api.exceptions import SequenceNotInitializedError
from village_api.models.counter import Counter
from village_api.services.store import store_errors

logger = logging.getLogger(__name__)


class SequenceGenerator:
    """
    Atomic named-sequence allocator.

    Holds only a session factory; each call opens, commits and closes its
    own session, independent of the caller's request transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def next_value(self, sequence_name: str) -> int:
        """
        Increment the named counter and return the new value.

        Args:
            sequence_name: Counter name; must have been seeded.

        Returns:
            The newly issued value (previous value + 1).

        Raises:
            SequenceNotInitializedError: No counter row exists for the name.
            DatabaseError: The statement failed or timed out.
        """
        stmt = (
            update(Counter)
            .where(Counter.name == sequence_name)
            .values(sequence_value=Counter.sequence_value + 1)
            .returning(Counter.sequence_value)
            .execution_options(synchronize_session=False)
        )

        with store_errors("next_sequence_value", sequence_name=sequence_name):
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(stmt)
                    value = result.scalar_one_or_none()

        if value is None:
            logger.error("Sequence '%s' requested but no counter row exists", sequence_name)
            raise SequenceNotInitializedError(sequence_name)

        logger.debug("Sequence '%s' issued %d", sequence_name, value)
        return value


# ── Singleton Instance ────────────────────────────────────────────────────
sequence_generator = SequenceGenerator(async_session_factory)


def get_sequence_generator() -> SequenceGenerator:
    """FastAPI dependency returning the shared generator (overridable in tests)."""
    return sequence_generator
