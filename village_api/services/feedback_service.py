"""
Village Backend — Suggestion & Query Service
==============================================

What:  Citizen feedback in two flavours:
       - suggestions (title + content), answered via `response`
       - queries (free-text matter), answered via `admin_response`
How:   Both are append-only apart from the admin's answer. Ids come from the
       "suggestions" and "queries" sequences. Listings are newest first.
"""

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from village_api.exceptions import NotFoundError
from village_api.models.community import CitizenQuery, Suggestion
from village_api.schemas.community import QueryCreateRequest, SuggestionCreateRequest
from village_api.services.sequence_service import SequenceGenerator
from village_api.services.store import store_errors

logger = logging.getLogger(__name__)


class FeedbackService:

    # ── Suggestions ───────────────────────────────────────────────────────

    async def create_suggestion(
        self, db: AsyncSession, sequences: SequenceGenerator, payload: SuggestionCreateRequest
    ) -> Suggestion:
        suggestion_id = await sequences.next_value("suggestions")
        suggestion = Suggestion(
            id=suggestion_id,
            title=payload.title,
            content=payload.content,
            username=payload.username,
            created_at=datetime.now(timezone.utc),
        )
        with store_errors("create_suggestion", suggestion_id=suggestion_id):
            db.add(suggestion)
            await db.flush()
        logger.info("Suggestion %d submitted", suggestion_id)
        return suggestion

    async def list_suggestions(self, db: AsyncSession) -> List[Suggestion]:
        with store_errors("list_suggestions"):
            result = await db.execute(
                select(Suggestion).order_by(desc(Suggestion.created_at), desc(Suggestion.id))
            )
            return list(result.scalars().all())

    async def respond_suggestion(self, db: AsyncSession, suggestion_id: int, response: str) -> Suggestion:
        with store_errors("respond_suggestion", suggestion_id=suggestion_id):
            result = await db.execute(select(Suggestion).where(Suggestion.id == suggestion_id))
            suggestion = result.scalar_one_or_none()
            if suggestion is None:
                raise NotFoundError(resource="suggestion", resource_id=suggestion_id)
            suggestion.response = response
            await db.flush()
        return suggestion

    # ── Queries ───────────────────────────────────────────────────────────

    async def create_query(
        self, db: AsyncSession, sequences: SequenceGenerator, payload: QueryCreateRequest
    ) -> CitizenQuery:
        query_id = await sequences.next_value("queries")
        query = CitizenQuery(
            id=query_id,
            username=payload.username,
            matter=payload.matter,
            time=payload.time or datetime.now(timezone.utc),
        )
        with store_errors("create_query", query_id=query_id):
            db.add(query)
            await db.flush()
        logger.info("Query %d created", query_id)
        return query

    async def list_queries_for_user(self, db: AsyncSession, username: str) -> List[CitizenQuery]:
        with store_errors("list_queries_for_user"):
            result = await db.execute(
                select(CitizenQuery)
                .where(CitizenQuery.username == username)
                .order_by(desc(CitizenQuery.time), desc(CitizenQuery.id))
            )
            return list(result.scalars().all())

    async def list_all_queries(self, db: AsyncSession) -> List[CitizenQuery]:
        with store_errors("list_all_queries"):
            result = await db.execute(
                select(CitizenQuery).order_by(desc(CitizenQuery.time), desc(CitizenQuery.id))
            )
            return list(result.scalars().all())

    async def respond_query(self, db: AsyncSession, query_id: int, response: str) -> CitizenQuery:
        with store_errors("respond_query", query_id=query_id):
            result = await db.execute(select(CitizenQuery).where(CitizenQuery.id == query_id))
            query = result.scalar_one_or_none()
            if query is None:
                raise NotFoundError(resource="query", resource_id=query_id)
            query.admin_response = response
            await db.flush()
        return query


feedback_service = FeedbackService()
