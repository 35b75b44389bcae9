"""
Village Backend — Suggestion & Query Routes
=============================================

Route Inventory:
    POST /createSuggestion          citizen submits a suggestion
    GET  /suggestions               all suggestions, newest first
    POST /respondSuggestion         admin answers a suggestion
    POST /createQuery               citizen raises a query
    GET  /queries?username=         a citizen's own queries, newest first
    GET  /admin/queries             every query, newest first
    PUT  /admin/respondQuery/{id}   admin answers a query
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from village_api.database import get_db_session
from village_api.exceptions import ValidationError
from village_api.routes import RecordIdPath
from village_api.schemas.common import ErrorResponse, MessageResponse
from village_api.schemas.community import (
    QueryCreateRequest,
    QueryRespondRequest,
    QueryResponse,
    SuggestionCreateRequest,
    SuggestionRespondRequest,
    SuggestionResponse,
)
from village_api.services.feedback_service import feedback_service
from village_api.services.sequence_service import SequenceGenerator, get_sequence_generator

router = APIRouter(tags=["Feedback"])


# ── Suggestions ───────────────────────────────────────────────────────────

@router.post("/createSuggestion", response_model=MessageResponse)
async def create_suggestion(
    payload: SuggestionCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    sequences: SequenceGenerator = Depends(get_sequence_generator),
) -> MessageResponse:
    await feedback_service.create_suggestion(db, sequences, payload)
    return MessageResponse(message="Suggestion submitted successfully")


@router.get("/suggestions", response_model=List[SuggestionResponse])
async def list_suggestions(db: AsyncSession = Depends(get_db_session)) -> List[SuggestionResponse]:
    suggestions = await feedback_service.list_suggestions(db)
    return [SuggestionResponse.model_validate(s) for s in suggestions]


@router.post(
    "/respondSuggestion",
    response_model=MessageResponse,
    responses={404: {"description": "Suggestion not found", "model": ErrorResponse}},
)
async def respond_suggestion(
    payload: SuggestionRespondRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await feedback_service.respond_suggestion(db, payload.id, payload.response)
    return MessageResponse(message="Suggestion responded successfully")


# ── Queries ───────────────────────────────────────────────────────────────

@router.post("/createQuery", response_model=MessageResponse)
async def create_query(
    payload: QueryCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    sequences: SequenceGenerator = Depends(get_sequence_generator),
) -> MessageResponse:
    await feedback_service.create_query(db, sequences, payload)
    return MessageResponse(message="Query created successfully")


@router.get(
    "/queries",
    response_model=List[QueryResponse],
    responses={400: {"description": "Missing username", "model": ErrorResponse}},
)
async def list_user_queries(
    username: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> List[QueryResponse]:
    if not username:
        raise ValidationError("Username query parameter is required", field="username")
    queries = await feedback_service.list_queries_for_user(db, username)
    return [QueryResponse.model_validate(q) for q in queries]


@router.get("/admin/queries", response_model=List[QueryResponse])
async def list_all_queries(db: AsyncSession = Depends(get_db_session)) -> List[QueryResponse]:
    queries = await feedback_service.list_all_queries(db)
    return [QueryResponse.model_validate(q) for q in queries]


@router.put(
    "/admin/respondQuery/{query_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Query not found", "model": ErrorResponse}},
)
async def respond_query(
    query_id: RecordIdPath,
    payload: QueryRespondRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await feedback_service.respond_query(db, query_id, payload.response)
    return MessageResponse(message="Query responded successfully")
