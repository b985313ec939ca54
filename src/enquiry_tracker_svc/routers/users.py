from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from enquiry_tracker_svc.models import UserRole, get_db
from enquiry_tracker_svc.schemas.auth import TokenData
from enquiry_tracker_svc.schemas.common import Envelope, MessageEnvelope, parse_filter
from enquiry_tracker_svc.schemas.user import UserCreate, UserFilter, UserPage, UserResponse, UserUpdate
from enquiry_tracker_svc.services import user_service
from enquiry_tracker_svc.routers.auth import require_roles

logger = logging.getLogger(__name__)

users_router = APIRouter()

require_admin = require_roles(UserRole.Admin)


@users_router.get("", response_model=Envelope[UserPage])
def list_users(
    search: Optional[str] = None,
    role: Optional[str] = None,
    sort: Literal["createdAt", "updatedAt", "name", "email", "role"] = "createdAt",
    order: Literal["asc", "desc"] = "desc",
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
) -> Envelope[UserPage]:
    filters = parse_filter(UserFilter, search=search, role=role, sort=sort, order=order, page=page, limit=limit)
    return Envelope(message="Users fetched", data=user_service.list_users(db, filters))


@users_router.post("", response_model=Envelope[UserResponse], status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
) -> Envelope[UserResponse]:
    user = user_service.create_user(db, payload)
    return Envelope(message="User created successfully", data=UserResponse.model_validate(user))


@users_router.get("/{user_id}", response_model=Envelope[UserResponse])
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
) -> Envelope[UserResponse]:
    user = user_service.get_user(db, user_id)
    return Envelope(message="User fetched successfully", data=UserResponse.model_validate(user))


@users_router.put("/{user_id}", response_model=Envelope[UserResponse])
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
) -> Envelope[UserResponse]:
    user = user_service.update_user(db, user_id, payload)
    return Envelope(message="User updated successfully", data=UserResponse.model_validate(user))


@users_router.delete("/{user_id}", response_model=MessageEnvelope)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
) -> MessageEnvelope:
    user_service.delete_user(db, user_id)
    return MessageEnvelope(message="User deleted successfully")
