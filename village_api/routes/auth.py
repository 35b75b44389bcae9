"""
Village Backend — Login, Signup and Profile Routes
====================================================

What:  POST /login, POST /signup, GET /user/profile, PUT /user/profile/update.
How:   Thin handlers; UserService does the work and raises application
       exceptions that main.py turns into error responses.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from village_api.database import get_db_session
from village_api.exceptions import ValidationError
from village_api.schemas.common import ErrorResponse, MessageResponse
from village_api.schemas.user import (
    LoginRequest,
    LoginResponse,
    ProfileUpdateRequest,
    SignupRequest,
    UserResponse,
)
from village_api.services.sequence_service import SequenceGenerator, get_sequence_generator
from village_api.services.user_service import user_service


router = APIRouter(tags=["Accounts"])


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    responses={
        200: {"description": "Logged in, or account not yet activated (success=false)"},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Check a username and password",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    """
    An unactivated account with the right password answers 200 with
    success=false; wrong password and unknown username both answer 401.
    """
    return await user_service.login(db, payload.username, payload.password)


@router.post(
    "/signup",
    response_model=MessageResponse,
    responses={400: {"description": "Username taken", "model": ErrorResponse}},
    summary="Register a citizen account",
)
async def signup(
    payload: SignupRequest,
    db: AsyncSession = Depends(get_db_session),
    sequences: SequenceGenerator = Depends(get_sequence_generator),
) -> MessageResponse:
    await user_service.signup(db, sequences, payload)
    return MessageResponse(message="User registered successfully. Awaiting activation.")


@router.get(
    "/user/profile",
    response_model=UserResponse,
    responses={
        400: {"description": "Missing username", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Get a user's profile",
)
async def get_profile(
    username: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    if not username:
        raise ValidationError("Username query parameter is required", field="username")
    user = await user_service.get_profile(db, username)
    return UserResponse.model_validate(user)


@router.put(
    "/user/profile/update",
    response_model=MessageResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Update a user's contact details",
)
async def update_profile(
    payload: ProfileUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.update_profile(db, payload)
    return MessageResponse(message="Profile updated successfully")
