"""
Village Backend — Announcement Service
========================================

What:  Create, list, update and delete admin announcements.
How:   Ids come from the "announcements" sequence; listing is newest first.
"""

import logging
from typing import List

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from village_api.exceptions import NotFoundError
from village_api.models.community import Announcement
from village_api.schemas.community import AnnouncementRequest
from village_api.services.sequence_service import SequenceGenerator
from village_api.services.store import store_errors

logger = logging.getLogger(__name__)


class AnnouncementService:

    async def create_announcement(
        self, db: AsyncSession, sequences: SequenceGenerator, payload: AnnouncementRequest
    ) -> Announcement:
        announcement_id = await sequences.next_value("announcements")
        announcement = Announcement(
            id=announcement_id,
            title=payload.title,
            content=payload.content,
        )
        with store_errors("create_announcement", announcement_id=announcement_id):
            db.add(announcement)
            await db.flush()
        logger.info("Announcement %d created", announcement_id)
        return announcement

    async def list_announcements(self, db: AsyncSession) -> List[Announcement]:
        with store_errors("list_announcements"):
            result = await db.execute(
                select(Announcement).order_by(desc(Announcement.created_at), desc(Announcement.id))
            )
            return list(result.scalars().all())

    async def update_announcement(
        self, db: AsyncSession, announcement_id: int, payload: AnnouncementRequest
    ) -> Announcement:
        """
        Change title and/or content. A field omitted or sent as null keeps its
        current value. NotFoundError when the id is unknown.
        """
        with store_errors("update_announcement", announcement_id=announcement_id):
            result = await db.execute(
                select(Announcement).where(Announcement.id == announcement_id)
            )
            announcement = result.scalar_one_or_none()
            if announcement is None:
                raise NotFoundError(resource="announcement", resource_id=announcement_id)

            for field, value in payload.model_dump(exclude_none=True).items():
                setattr(announcement, field, value)
            await db.flush()
        return announcement

    async def delete_announcement(self, db: AsyncSession, announcement_id: int) -> None:
        with store_errors("delete_announcement", announcement_id=announcement_id):
            result = await db.execute(
                delete(Announcement)
                .where(Announcement.id == announcement_id)
                .execution_options(synchronize_session=False)
            )
        if result.rowcount == 0:
            raise NotFoundError(resource="announcement", resource_id=announcement_id)
        logger.info("Announcement %d deleted", announcement_id)


announcement_service = AnnouncementService()
