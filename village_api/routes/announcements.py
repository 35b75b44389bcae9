"""
Village Backend — Announcement Routes
=======================================

What:  Admin-managed announcements: create, list (newest first), update, delete.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from village_api.database import get_db_session
from village_api.routes import RecordIdPath
from village_api.schemas.common import ErrorResponse, MessageResponse
from village_api.schemas.community import (
    AnnouncementMutationResponse,
    AnnouncementRequest,
    AnnouncementResponse,
)
from village_api.services.announcement_service import announcement_service
from village_api.services.sequence_service import SequenceGenerator, get_sequence_generator

router = APIRouter(tags=["Announcements"])


@router.post("/createAnnouncement", response_model=AnnouncementMutationResponse)
async def create_announcement(
    payload: AnnouncementRequest,
    db: AsyncSession = Depends(get_db_session),
    sequences: SequenceGenerator = Depends(get_sequence_generator),
) -> AnnouncementMutationResponse:
    announcement = await announcement_service.create_announcement(db, sequences, payload)
    return AnnouncementMutationResponse(
        message="Announcement created successfully",
        data=AnnouncementResponse.model_validate(announcement),
    )


@router.get("/announcements", response_model=List[AnnouncementResponse])
async def list_announcements(
    db: AsyncSession = Depends(get_db_session),
) -> List[AnnouncementResponse]:
    announcements = await announcement_service.list_announcements(db)
    return [AnnouncementResponse.model_validate(a) for a in announcements]


@router.put(
    "/updateAnnouncement/{announcement_id}",
    response_model=AnnouncementMutationResponse,
    responses={404: {"description": "Announcement not found", "model": ErrorResponse}},
)
async def update_announcement(
    announcement_id: RecordIdPath,
    payload: AnnouncementRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AnnouncementMutationResponse:
    announcement = await announcement_service.update_announcement(db, announcement_id, payload)
    return AnnouncementMutationResponse(
        message="Announcement updated successfully",
        data=AnnouncementResponse.model_validate(announcement),
    )


@router.delete(
    "/deleteAnnouncement/{announcement_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Announcement not found", "model": ErrorResponse}},
)
async def delete_announcement(
    announcement_id: RecordIdPath,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await announcement_service.delete_announcement(db, announcement_id)
    return MessageResponse(message="Announcement deleted successfully")
