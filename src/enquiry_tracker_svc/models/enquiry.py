from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship

from .base import Base, utcnow
from .enums import EnquiryStatus


class Enquiry(Base):
    __tablename__ = "enquiries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=True)
    message = Column(Text, nullable=True)
    status = Column(
        SAEnum(EnquiryStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=EnquiryStatus.New,
        index=True,
    )
    # Weak references: no FK constraint, deleting a user leaves these ids in place
    assigned_to_id = Column(Integer, nullable=True, index=True)
    created_by_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    assigned_to = relationship(
        "User",
        primaryjoin="foreign(Enquiry.assigned_to_id) == User.id",
        viewonly=True,
        lazy="joined",
    )
    created_by = relationship(
        "User",
        primaryjoin="foreign(Enquiry.created_by_id) == User.id",
        viewonly=True,
        lazy="joined",
    )

    def __repr__(self) -> str:
        return f"<Enquiry(id={self.id}, customer_name='{self.customer_name}', status='{self.status}')>"
