"""
Village Backend — Shared Pydantic Schemas
===========================================

What:  Response shapes shared by every route module: plain acknowledgements,
       the error body, and the health report. Also the bounds of an entity id.

Entity ids are stored in 32-bit INTEGER columns. Ids in paths and bodies are
validated against that range, so an oversized value is a 400 instead of a
driver overflow.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, Field

MIN_RECORD_ID = -(2**31)
MAX_RECORD_ID = 2**31 - 1

RecordId = Annotated[int, Field(ge=MIN_RECORD_ID, le=MAX_RECORD_ID)]


class MessageResponse(BaseModel):
    """Acknowledgement returned by create/update/delete endpoints."""
    message: str = Field(description="Human-readable result")


class ErrorResponse(BaseModel):
    """
    What:  Error body returned by every failing endpoint.

    Example:
        {
            "error": "Crop already exists",
            "request_id": "1f3a9c2e"
        }
    """
    error: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
