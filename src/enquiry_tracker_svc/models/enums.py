from enum import Enum


class UserRole(str, Enum):
    Admin = "admin"
    Staff = "staff"


class EnquiryStatus(str, Enum):
    New = "new"
    InProgress = "in-progress"
    Closed = "closed"


class ActivityAction(str, Enum):
    Assigned = "assigned"
    Unassigned = "unassigned"
