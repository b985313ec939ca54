from typing import List, Optional
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from enquiry_tracker_svc.models import ActivityLog, ActivityAction, Enquiry
from enquiry_tracker_svc.services.enquiry_service import get_enquiry, get_staff_member
from enquiry_tracker_svc.services.persistence import save

logger = logging.getLogger(__name__)


def record_activity(db: Session, enquiry_id: int, actor_id: Optional[int], action: ActivityAction, details: str) -> ActivityLog:
    entry = ActivityLog(action=action.value, enquiry_id=enquiry_id, user_id=actor_id, details=details)
    save(db, entry)
    return entry


def assign_enquiry(db: Session, enquiry_id: int, staff_id: Optional[int], actor_id: Optional[int]) -> Enquiry:
    """Set or clear the staff member responsible for an enquiry.

    A ``None`` staff_id unassigns, even when the enquiry is already
    unassigned. Otherwise the target must be an existing staff user
    (ValidationError) and then the enquiry must exist (NotFoundError).
    Every successful call appends one activity entry. The enquiry update and
    the log append are committed separately.
    """
    if not staff_id:
        enquiry = get_enquiry(db, enquiry_id)
        enquiry.assigned_to_id = None
        save(db, enquiry)

        record_activity(db, enquiry_id, actor_id, ActivityAction.Unassigned, "Unassigned")
        logger.info("Enquiry %s unassigned by user %s", enquiry_id, actor_id)
        return enquiry

    staff = get_staff_member(db, staff_id)

    enquiry = get_enquiry(db, enquiry_id)
    enquiry.assigned_to_id = staff.id
    save(db, enquiry)

    record_activity(
        db,
        enquiry_id,
        actor_id,
        ActivityAction.Assigned,
        f"Assigned to {staff.name} ({staff.email})",
    )
    logger.info("Enquiry %s assigned to user %s by user %s", enquiry_id, staff.id, actor_id)
    return enquiry


def list_activity(db: Session, enquiry_id: int) -> List[ActivityLog]:
    """Return every log entry for an enquiry, newest first."""
    stmt = (
        select(ActivityLog)
        .where(ActivityLog.enquiry_id == enquiry_id)
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
    )
    return list(db.execute(stmt).scalars().all())
