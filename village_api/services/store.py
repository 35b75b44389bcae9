"""
Village Backend — Store Error Translation
===========================================

What:  One context manager that turns driver/ORM failures into application
       exceptions, shared by every service.
How:   Wrap the statements of an operation:

           with store_errors("add_crop", duplicate_message="Crop already exists"):
               db.add(crop)
               await db.flush()

       - VillageError subclasses (NotFoundError, ...) pass through unchanged
       - IntegrityError becomes DuplicateKeyError when the operation declares a
         duplicate message (its only unique constraints are business keys),
         otherwise DatabaseError
       - anything else is logged with a stack trace and becomes DatabaseError

The IntegrityError is raised by the database's unique index, so two
concurrent inserts of the same key cannot both succeed.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sqlalchemy.exc import IntegrityError

from village_api.exceptions import DatabaseError, DuplicateKeyError, VillageError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(
    operation: str,
    duplicate_message: Optional[str] = None,
    **context: Any,
) -> Iterator[None]:
    """
    Translate exceptions raised inside the block.

    Args:
        operation: Name used in logs and in the error context.
        duplicate_message: Client-facing message for a unique-constraint
            violation. None means a violation is unexpected (→ DatabaseError).
        **context: Extra fields for the log line and the exception context.
    """
    try:
        yield
    except VillageError:
        raise
    except IntegrityError as e:
        ctx = {"operation": operation, **context}
        if duplicate_message is not None:
            logger.info("Duplicate key rejected during %s: %s", operation, context)
            raise DuplicateKeyError(message=duplicate_message, context=ctx) from e
        logger.error("Integrity error during %s: %s", operation, str(e))
        raise DatabaseError(context={**ctx, "error_type": type(e).__name__}) from e
    except Exception as e:
        logger.error("Database error during %s: %s", operation, str(e), exc_info=True)
        raise DatabaseError(
            context={"operation": operation, "error_type": type(e).__name__, **context}
        ) from e
