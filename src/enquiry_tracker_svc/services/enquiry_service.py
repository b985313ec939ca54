from typing import Optional
import logging

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from enquiry_tracker_svc.errors import NotFoundError, ValidationError
from enquiry_tracker_svc.models import Enquiry, User, UserRole, EnquiryStatus
from enquiry_tracker_svc.schemas.common import page_count
from enquiry_tracker_svc.schemas.enquiry import (
    EnquiryCreate,
    EnquiryFilter,
    EnquiryPage,
    EnquiryResponse,
    EnquiryUpdate,
)
from enquiry_tracker_svc.services.persistence import remove, save

logger = logging.getLogger(__name__)


def get_staff_member(db: Session, user_id: int) -> User:
    """Return the user with ``user_id`` if it exists and has the staff role.

    Raises ValidationError otherwise; an assignment target that is missing or
    not staff is a business-rule failure, not a missing resource.
    """
    user = db.get(User, user_id)
    if user is None:
        raise ValidationError("Assigned user not found")
    if user.role != UserRole.Staff:
        raise ValidationError("Assigned user must be a staff member")
    return user


def create_enquiry(db: Session, payload: EnquiryCreate, creator_id: Optional[int]) -> Enquiry:
    """Persist a new enquiry. It always starts as ``new`` and unassigned."""
    enquiry = Enquiry(
        customer_name=payload.customer_name,
        email=str(payload.email),
        phone=payload.phone,
        message=payload.message,
        status=EnquiryStatus.New,
        assigned_to_id=None,
        created_by_id=creator_id,
    )
    save(db, enquiry)
    return enquiry


def list_enquiries(db: Session, filters: EnquiryFilter) -> EnquiryPage:
    """Return one page of enquiries matching ``filters``.

    Ordering is by creation time then id, so consecutive pages never overlap.
    """
    conditions = []
    if filters.status is not None:
        conditions.append(Enquiry.status == filters.status)
    if filters.assigned_to is not None:
        conditions.append(Enquiry.assigned_to_id == filters.assigned_to)
    if filters.created_by is not None:
        conditions.append(Enquiry.created_by_id == filters.created_by)
    if filters.search:
        pattern = f"%{filters.search}%"
        conditions.append(or_(Enquiry.customer_name.ilike(pattern), Enquiry.email.ilike(pattern)))

    total = db.execute(select(func.count(Enquiry.id)).where(*conditions)).scalar_one()

    if filters.sort == "asc":
        ordering = (Enquiry.created_at.asc(), Enquiry.id.asc())
    else:
        ordering = (Enquiry.created_at.desc(), Enquiry.id.desc())

    stmt = (
        select(Enquiry)
        .where(*conditions)
        .order_by(*ordering)
        .offset((filters.page - 1) * filters.limit)
        .limit(filters.limit)
    )
    enquiries = db.execute(stmt).scalars().all()

    return EnquiryPage(
        enquiries=[EnquiryResponse.model_validate(e) for e in enquiries],
        total=total,
        page=filters.page,
        pages=page_count(total, filters.limit),
    )


def get_enquiry(db: Session, enquiry_id: int) -> Enquiry:
    enquiry = db.get(Enquiry, enquiry_id)
    if enquiry is None:
        raise NotFoundError("Enquiry not found")
    return enquiry


def update_enquiry(db: Session, enquiry_id: int, payload: EnquiryUpdate) -> Enquiry:
    """Apply only the fields present in ``payload``.

    Status changes made here are not written to the activity log; only
    assign_enquiry journals.
    """
    enquiry = get_enquiry(db, enquiry_id)
    update_data = payload.model_dump(exclude_unset=True)

    if "assigned_to" in update_data:
        assigned_val = update_data.pop("assigned_to")
        if assigned_val is not None:
            get_staff_member(db, assigned_val)
        enquiry.assigned_to_id = assigned_val

    if "email" in update_data:
        update_data["email"] = str(update_data["email"])

    for field, value in update_data.items():
        setattr(enquiry, field, value)

    save(db, enquiry)
    return enquiry


def delete_enquiry(db: Session, enquiry_id: int) -> None:
    """Hard-delete an enquiry; its activity log entries are left in place."""
    enquiry = get_enquiry(db, enquiry_id)
    remove(db, enquiry)
    logger.info("Deleted enquiry %s", enquiry_id)
