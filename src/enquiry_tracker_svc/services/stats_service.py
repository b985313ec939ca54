from datetime import timedelta
import logging

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from enquiry_tracker_svc.models import Enquiry, EnquiryStatus
from enquiry_tracker_svc.models.base import utcnow
from enquiry_tracker_svc.schemas.enquiry import DailyCount, EnquiryStats, RecentEnquiry

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5
WINDOW_DAYS = 7


def enquiry_stats(db: Session) -> EnquiryStats:
    """Dashboard counters for the enquiry collection.

    ``last7days`` buckets enquiries created in the trailing 7 * 24 hours by
    UTC calendar date, oldest first; days without enquiries are omitted.
    """
    counts = dict(
        db.execute(select(Enquiry.status, func.count(Enquiry.id)).group_by(Enquiry.status)).all()
    )
    total = db.execute(select(func.count(Enquiry.id))).scalar_one()

    recent = db.execute(
        select(Enquiry).order_by(Enquiry.created_at.desc(), Enquiry.id.desc()).limit(RECENT_LIMIT)
    ).scalars().all()

    since = utcnow() - timedelta(days=WINDOW_DAYS)
    day = func.date(Enquiry.created_at)
    daily_rows = db.execute(
        select(day.label("date"), func.count(Enquiry.id).label("count"))
        .where(Enquiry.created_at >= since)
        .group_by(day)
        .order_by(day)
    ).all()

    return EnquiryStats(
        total=total,
        new=counts.get(EnquiryStatus.New, 0),
        in_progress=counts.get(EnquiryStatus.InProgress, 0),
        closed=counts.get(EnquiryStatus.Closed, 0),
        recent=[RecentEnquiry.model_validate(e) for e in recent],
        # SQLite returns strings, other backends date objects
        last7days=[DailyCount(date=str(bucket), count=n) for bucket, n in daily_rows],
    )
