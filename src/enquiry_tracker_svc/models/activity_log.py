from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class ActivityLog(Base):
    """Append-only audit entry for an assignment change on an enquiry."""

    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    action = Column(String, nullable=False)
    # enquiry rows may be deleted while their log entries remain
    enquiry_id = Column(Integer, nullable=False, index=True)
    user_id = Column(Integer, nullable=True)
    details = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    user = relationship(
        "User",
        primaryjoin="foreign(ActivityLog.user_id) == User.id",
        viewonly=True,
        lazy="joined",
    )

    def __repr__(self) -> str:
        return f"<ActivityLog(id={self.id}, enquiry_id={self.enquiry_id}, action='{self.action}')>"
