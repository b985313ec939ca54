from .common import Envelope, ErrorEnvelope, MessageEnvelope, Pagination
from .auth import TokenData, LoginRequest, LoginResponse, RegisterRequest
from .user import UserCreate, UserUpdate, UserSummary, UserResponse, UserFilter, UserPage
from .enquiry import (
    EnquiryCreate,
    EnquiryUpdate,
    EnquiryResponse,
    EnquiryFilter,
    EnquiryPage,
    AssignRequest,
    ActivityResponse,
    EnquiryStats,
)

__all__ = [
    "Envelope",
    "ErrorEnvelope",
    "MessageEnvelope",
    "Pagination",
    "TokenData",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "UserCreate",
    "UserUpdate",
    "UserSummary",
    "UserResponse",
    "UserFilter",
    "UserPage",
    "EnquiryCreate",
    "EnquiryUpdate",
    "EnquiryResponse",
    "EnquiryFilter",
    "EnquiryPage",
    "AssignRequest",
    "ActivityResponse",
    "EnquiryStats",
]
