from __future__ import annotations

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from enquiry_tracker_svc.models import UserRole, get_db
from enquiry_tracker_svc.schemas.auth import TokenData
from enquiry_tracker_svc.schemas.common import Envelope, MessageEnvelope, parse_filter
from enquiry_tracker_svc.schemas.enquiry import (
    ActivityResponse,
    AssignRequest,
    EnquiryCreate,
    EnquiryFilter,
    EnquiryPage,
    EnquiryResponse,
    EnquiryStats,
    EnquiryUpdate,
)
from enquiry_tracker_svc.services import assignment_service, enquiry_service, stats_service
from enquiry_tracker_svc.routers.auth import require_roles

logger = logging.getLogger(__name__)

enquiries_router = APIRouter()

require_member = require_roles(UserRole.Admin, UserRole.Staff)


@enquiries_router.post("", response_model=Envelope[EnquiryResponse], status_code=status.HTTP_201_CREATED)
def create_enquiry(
    payload: EnquiryCreate,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_member),
) -> Envelope[EnquiryResponse]:
    enquiry = enquiry_service.create_enquiry(db, payload, creator_id=current_user.id)
    return Envelope(message="Enquiry created successfully", data=EnquiryResponse.model_validate(enquiry))


@enquiries_router.get("", response_model=Envelope[EnquiryPage])
def list_enquiries(
    status: Optional[str] = None,
    assigned_to: Optional[str] = Query(None, alias="assignedTo"),
    created_by: Optional[str] = Query(None, alias="createdBy"),
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort: Literal["asc", "desc"] = "desc",
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_member),
) -> Envelope[EnquiryPage]:
    """List enquiries with filters, search, sort and pagination.

    Unknown query keys are ignored and blank values mean "no filter".
    """
    filters = parse_filter(
        EnquiryFilter,
        status=status,
        assigned_to=assigned_to,
        created_by=created_by,
        search=search,
        page=page,
        limit=limit,
        sort=sort,
    )
    return Envelope(message="Enquiries fetched successfully", data=enquiry_service.list_enquiries(db, filters))


@enquiries_router.get("/stats", response_model=Envelope[EnquiryStats])
def get_enquiry_stats(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_member),
) -> Envelope[EnquiryStats]:
    return Envelope(message="Stats fetched successfully", data=stats_service.enquiry_stats(db))


@enquiries_router.put("/{enquiry_id}/assign", response_model=Envelope[EnquiryResponse])
def assign_enquiry(
    enquiry_id: int,
    payload: AssignRequest,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_member),
) -> Envelope[EnquiryResponse]:
    enquiry = assignment_service.assign_enquiry(db, enquiry_id, payload.assigned_to, actor_id=current_user.id)
    message = "Enquiry assigned successfully" if enquiry.assigned_to_id else "Enquiry unassigned"
    return Envelope(message=message, data=EnquiryResponse.model_validate(enquiry))


@enquiries_router.get("/{enquiry_id}/activity", response_model=Envelope[List[ActivityResponse]])
def get_enquiry_activity(
    enquiry_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_member),
) -> Envelope[List[ActivityResponse]]:
    logs = assignment_service.list_activity(db, enquiry_id)
    return Envelope(message="Activity logs fetched", data=[ActivityResponse.model_validate(entry) for entry in logs])


@enquiries_router.get("/{enquiry_id}", response_model=Envelope[EnquiryResponse])
def get_enquiry(
    enquiry_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_member),
) -> Envelope[EnquiryResponse]:
    enquiry = enquiry_service.get_enquiry(db, enquiry_id)
    return Envelope(message="Enquiry fetched successfully", data=EnquiryResponse.model_validate(enquiry))


@enquiries_router.put("/{enquiry_id}", response_model=Envelope[EnquiryResponse])
def update_enquiry(
    enquiry_id: int,
    payload: EnquiryUpdate,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_member),
) -> Envelope[EnquiryResponse]:
    enquiry = enquiry_service.update_enquiry(db, enquiry_id, payload)
    return Envelope(message="Enquiry updated successfully", data=EnquiryResponse.model_validate(enquiry))


@enquiries_router.delete("/{enquiry_id}", response_model=MessageEnvelope)
def delete_enquiry(
    enquiry_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_member),
) -> MessageEnvelope:
    enquiry_service.delete_enquiry(db, enquiry_id)
    return MessageEnvelope(message="Enquiry deleted successfully")
