"""
Village Backend — Account Administration Routes
=================================================

What:  Activation queue, admin accounts, citizen accounts and the public
       admin contact list.

Route Inventory:
    POST /activate-user     flip activation 0 → 1
    POST /deactivate-user   delete the account
    GET  /pending-users     accounts awaiting activation (404 when none)
    POST /add-admin         create an active admin
    POST /remove-admin      delete an admin
    GET  /admin/users       admins, minus the built-in seed admin
    GET  /users             active citizens
    POST /remove-user       delete a citizen
    GET  /admins            admin contact cards (name, phone, job_title)
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from village_api.database import get_db_session
from village_api.schemas.common import ErrorResponse, MessageResponse
from village_api.schemas.user import (
    AdminContactResponse,
    AdminCreateRequest,
    PublicUserResponse,
    UserIdRequest,
    UserResponse,
)
from village_api.services.sequence_service import SequenceGenerator, get_sequence_generator
from village_api.services.user_service import user_service

router = APIRouter(tags=["Administration"])

_NOT_FOUND = {404: {"description": "No matching account", "model": ErrorResponse}}


# ── Activation ────────────────────────────────────────────────────────────

@router.post("/activate-user", response_model=MessageResponse, responses=_NOT_FOUND)
async def activate_user(
    payload: UserIdRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.activate_user(db, payload.user_id)
    return MessageResponse(message="User activated successfully")


@router.post(
    "/deactivate-user",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Deactivate a user (deletes the account)",
)
async def deactivate_user(
    payload: UserIdRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.deactivate_user(db, payload.user_id)
    return MessageResponse(message="User deactivated successfully")


@router.get("/pending-users", response_model=List[UserResponse], responses=_NOT_FOUND)
async def pending_users(db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    users = await user_service.list_pending_users(db)
    return [UserResponse.model_validate(u) for u in users]


# ── Admins ────────────────────────────────────────────────────────────────

@router.post(
    "/add-admin",
    response_model=MessageResponse,
    responses={400: {"description": "Username taken", "model": ErrorResponse}},
)
async def add_admin(
    payload: AdminCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    sequences: SequenceGenerator = Depends(get_sequence_generator),
) -> MessageResponse:
    await user_service.add_admin(db, sequences, payload)
    return MessageResponse(message="Admin added successfully")


@router.post("/remove-admin", response_model=MessageResponse, responses=_NOT_FOUND)
async def remove_admin(
    payload: UserIdRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.remove_admin(db, payload.user_id)
    return MessageResponse(message="Admin removed successfully")


@router.get("/admin/users", response_model=List[UserResponse])
async def admin_users(db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    admins = await user_service.list_admins(db)
    return [UserResponse.model_validate(a) for a in admins]


@router.get("/admins", response_model=List[AdminContactResponse])
async def admin_contacts(db: AsyncSession = Depends(get_db_session)) -> List[AdminContactResponse]:
    admins = await user_service.list_admin_contacts(db)
    return [AdminContactResponse.model_validate(a) for a in admins]


# ── Citizens ──────────────────────────────────────────────────────────────

@router.get("/users", response_model=List[PublicUserResponse])
async def active_users(db: AsyncSession = Depends(get_db_session)) -> List[PublicUserResponse]:
    users = await user_service.list_active_users(db)
    return [PublicUserResponse.model_validate(u) for u in users]


@router.post("/remove-user", response_model=MessageResponse, responses=_NOT_FOUND)
async def remove_user(
    payload: UserIdRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.remove_user(db, payload.user_id)
    return MessageResponse(message="User removed successfully")
