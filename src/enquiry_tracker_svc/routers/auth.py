from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

import enquiry_tracker_svc.utils.security as security
from enquiry_tracker_svc.errors import ForbiddenError, UnauthorizedError
from enquiry_tracker_svc.models import UserRole, get_db
from enquiry_tracker_svc.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, TokenData
from enquiry_tracker_svc.schemas.common import Envelope
from enquiry_tracker_svc.schemas.user import UserResponse, UserSummary
from enquiry_tracker_svc.services import auth_service

logger = logging.getLogger(__name__)

auth_router = APIRouter()

# auto_error disabled so a missing header goes through the envelope handler
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_token_data(token: Optional[str] = Depends(oauth2_scheme)) -> TokenData:
    """Verify the bearer token and return its claims without touching the store."""
    if not token:
        raise UnauthorizedError("No token provided")

    payload = security.decode_access_token(token)
    if payload is None:
        raise UnauthorizedError("Invalid token")

    try:
        return TokenData(id=payload.get("id"), role=payload.get("role"))
    except PydanticValidationError:
        raise UnauthorizedError("Invalid token")


def require_roles(*roles: UserRole) -> Callable[..., TokenData]:
    """Dependency factory guarding a route by role.

    With no roles any authenticated user passes.
    """
    allowed = set(roles)

    def _checker(current_user: TokenData = Depends(get_token_data)) -> TokenData:
        if allowed and current_user.role not in allowed:
            raise ForbiddenError()
        return current_user

    return _checker


@auth_router.post("/register", response_model=Envelope[UserSummary], status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> Envelope[UserSummary]:
    user = auth_service.register(db, payload)
    return Envelope(message="User registered", data=UserSummary.model_validate(user))


@auth_router.post("/login", response_model=Envelope[LoginResponse])
def login(request: LoginRequest, db: Session = Depends(get_db)) -> Envelope[LoginResponse]:
    result = auth_service.login(db, str(request.email), request.password)
    return Envelope(message="Login successful", data=result)


@auth_router.get("/me", response_model=Envelope[UserResponse])
def me(
    current_user: TokenData = Depends(require_roles()),
    db: Session = Depends(get_db),
) -> Envelope[UserResponse]:
    user = auth_service.me(db, current_user.id)
    return Envelope(message="User fetched", data=UserResponse.model_validate(user))
