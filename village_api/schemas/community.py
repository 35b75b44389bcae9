"""
Village Backend — Announcement, Suggestion and Query Schemas
==============================================================
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from village_api.schemas.common import RecordId


# ══════════════════════════════════════════════════════════════════════════
# Announcements
# ══════════════════════════════════════════════════════════════════════════


class AnnouncementRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class AnnouncementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str] = None
    content: Optional[str] = None
    created_at: datetime


class AnnouncementMutationResponse(BaseModel):
    message: str
    data: AnnouncementResponse


# ══════════════════════════════════════════════════════════════════════════
# Suggestions
# ══════════════════════════════════════════════════════════════════════════


class SuggestionCreateRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    username: Optional[str] = None


class SuggestionRespondRequest(BaseModel):
    id: RecordId
    response: Optional[str] = None


class SuggestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str] = None
    content: Optional[str] = None
    username: Optional[str] = None
    created_at: datetime
    response: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Queries
# ══════════════════════════════════════════════════════════════════════════


class QueryCreateRequest(BaseModel):
    username: Optional[str] = None
    matter: Optional[str] = None
    time: Optional[datetime] = Field(
        default=None,
        description="When the query was raised; defaults to the server's current time",
    )


class QueryRespondRequest(BaseModel):
    response: Optional[str] = None


class QueryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: Optional[str] = None
    matter: Optional[str] = None
    time: datetime
    admin_response: Optional[str] = None
