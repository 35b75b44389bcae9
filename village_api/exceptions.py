"""
Village Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception class carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by services; caught by the global handlers.

Exception Hierarchy:
    VillageError (base)
    ├── ValidationError              → 400 Bad Request
    ├── AuthenticationError          → 401 Unauthorized
    ├── NotFoundError                → 404 Not Found
    ├── DuplicateKeyError            → 400 Bad Request
    ├── SequenceNotInitializedError  → 500 Internal Server Error
    └── DatabaseError                → 500 Internal Server Error

The `message` of every exception is safe to return to the client; `context`
is logged server-side only.
"""

from typing import Any, Dict, Optional


class VillageError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(VillageError):
    """
    Raised when client input is missing or malformed.

    When:    Non-integer placeId, missing username query parameter, bad body shape.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(VillageError):
    """
    Raised when a username/password pair does not match a stored account.

    The same message is used for an unknown username and for a wrong
    password, so the caller cannot probe which usernames exist.
    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(VillageError):
    """
    Raised when a requested entity does not exist.

    When:    Update or delete by an id that no row carries.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DuplicateKeyError(VillageError):
    """
    Raised when an insert or update violates a unique constraint.

    When:    Username taken, crop name taken, or a price already exists for
             the (place_id, crop_id) pair. Detected by the database's unique
             index, never by a lookup before the insert.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Duplicate value",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SequenceNotInitializedError(VillageError):
    """
    Raised when an id is requested from a sequence that has no counter row.

    Counters are seeded by the schema migration (or `init_db`) and are never
    created on demand. Hitting this error means the deployment is missing
    its seed data.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        sequence_name: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["sequence_name"] = sequence_name
        super().__init__(
            message=f"Sequence '{sequence_name}' has not been initialized",
            context=ctx,
        )
        self.sequence_name = sequence_name


class DatabaseError(VillageError):
    """
    Raised when a store operation fails unexpectedly.

    What:    Connection lost, statement timeout, or any driver error that is
             not a uniqueness violation.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; details such as
    the driver exception type go into `context` and the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
