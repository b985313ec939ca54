from .base import Base, get_db, init_db
from .enums import UserRole, EnquiryStatus, ActivityAction
from .user import User
from .enquiry import Enquiry
from .activity_log import ActivityLog

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "User",
    "Enquiry",
    "ActivityLog",
    "UserRole",
    "EnquiryStatus",
    "ActivityAction",
]
