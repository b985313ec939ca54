from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from enquiry_tracker_svc.models.enums import EnquiryStatus
from enquiry_tracker_svc.schemas.common import CamelModel, UTCDateTime
from enquiry_tracker_svc.schemas.user import UserSummary


class EnquiryCreate(CamelModel):
    customer_name: str = Field(..., min_length=2)
    email: EmailStr
    phone: Optional[str] = None
    message: Optional[str] = None


class EnquiryUpdate(CamelModel):
    """Payload for partial update of an Enquiry.

    Fields are optional; handlers apply only the fields that were sent
    (exclude_unset). ``assigned_to`` may be sent as null to clear the
    assignment.
    """

    customer_name: Optional[str] = Field(default=None, min_length=2)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    status: Optional[EnquiryStatus] = None
    assigned_to: Optional[int] = None

    @field_validator("customer_name", "email", "status")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class AssignRequest(CamelModel):
    # null, missing, or empty string unassigns
    assigned_to: Optional[int] = None

    @field_validator("assigned_to", mode="before")
    @classmethod
    def _empty_is_none(cls, v):
        if v == "":
            return None
        return v


class EnquiryResponse(CamelModel):
    id: int
    customer_name: str
    email: str
    phone: Optional[str] = None
    message: Optional[str] = None
    status: EnquiryStatus
    assigned_to: Optional[UserSummary] = None
    created_by: Optional[UserSummary] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime


class EnquiryFilter(BaseModel):
    """Recognized query options for the enquiry listing."""

    status: Optional[EnquiryStatus] = None
    assigned_to: Optional[int] = None
    created_by: Optional[int] = None
    search: Optional[str] = None
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    sort: Literal["asc", "desc"] = "desc"

    model_config = ConfigDict(extra="forbid")


class EnquiryPage(BaseModel):
    enquiries: List[EnquiryResponse]
    total: int
    page: int
    pages: int


class ActorSummary(CamelModel):
    id: int
    name: str
    email: str


class ActivityResponse(CamelModel):
    id: int
    action: str
    enquiry_id: int
    user: Optional[ActorSummary] = None
    details: Optional[str] = None
    created_at: UTCDateTime


class RecentEnquiry(CamelModel):
    id: int
    customer_name: str
    email: str
    status: EnquiryStatus
    created_at: UTCDateTime


class DailyCount(BaseModel):
    date: str
    count: int


class EnquiryStats(CamelModel):
    total: int
    new: int
    in_progress: int
    closed: int
    recent: List[RecentEnquiry]
    # explicit alias; to_camel would emit "last7Days"
    last7days: List[DailyCount] = Field(..., alias="last7days")
