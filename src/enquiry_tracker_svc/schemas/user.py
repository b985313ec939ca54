from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from enquiry_tracker_svc.models.enums import UserRole
from enquiry_tracker_svc.schemas.common import CamelModel, Pagination, UTCDateTime

MIN_PASSWORD_LENGTH = 6


class UserCreate(BaseModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    role: UserRole = UserRole.Staff


class UserUpdate(BaseModel):
    """Partial update; an empty password leaves the stored hash untouched."""

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None

    @field_validator("password")
    @classmethod
    def _password_length(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return v


class UserSummary(CamelModel):
    id: int
    name: str
    email: str
    role: UserRole


class UserResponse(UserSummary):
    created_at: UTCDateTime
    updated_at: UTCDateTime


class UserFilter(BaseModel):
    """Recognized query options for the user listing."""

    search: Optional[str] = None
    role: Optional[UserRole] = None
    sort: Literal["createdAt", "updatedAt", "name", "email", "role"] = "createdAt"
    order: Literal["asc", "desc"] = "desc"
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)

    model_config = ConfigDict(extra="forbid")


class UserPage(BaseModel):
    users: List[UserResponse]
    pagination: Pagination
