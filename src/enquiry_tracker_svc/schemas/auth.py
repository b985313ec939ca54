from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from enquiry_tracker_svc.models.enums import UserRole
from enquiry_tracker_svc.schemas.user import UserSummary


class TokenData(BaseModel):
    """Claims carried by an access token."""

    id: int
    role: UserRole


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginResponse(BaseModel):
    token: str
    user: UserSummary
