"""
Village Backend — Account Schemas
===================================

What:  Request and response models for login, signup, activation and admin
       management.
How:   Response models are built `from_attributes` straight from the ORM rows.
       None of them has a `password` field, so the stored hash never leaves
       the service layer.

Field naming follows the existing clients: signup and profile updates send
`jobTitle`, admin creation sends `job_title`, and login answers `userType`.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from village_api.schemas.common import RecordId


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    """
    `success=true` carries `userType`; `success=false` (inactive account)
    carries `message`.
    """
    success: bool
    userType: Optional[str] = None
    message: Optional[str] = None


class SignupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    job_title: Optional[str] = Field(default=None, alias="jobTitle")
    email: Optional[str] = None


class AdminCreateRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    job_title: Optional[str] = None
    email: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(min_length=1)
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    job_title: Optional[str] = Field(default=None, alias="jobTitle")
    email: Optional[str] = None


class UserIdRequest(BaseModel):
    user_id: RecordId


class PublicUserResponse(BaseModel):
    """Contact card of an account, without activation state."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    job_title: Optional[str] = None
    email: Optional[str] = None


class UserResponse(PublicUserResponse):
    """Full account view for administrators."""
    activation: int
    user_type: str


class AdminContactResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
