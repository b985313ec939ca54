import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import enquiry_tracker_svc.utils.security as security
from enquiry_tracker_svc.errors import ConflictError, NotFoundError
from enquiry_tracker_svc.models import User
from enquiry_tracker_svc.schemas.common import Pagination, page_count
from enquiry_tracker_svc.schemas.user import UserCreate, UserFilter, UserPage, UserResponse, UserUpdate
from enquiry_tracker_svc.services.auth_service import create_account, get_user_by_email
from enquiry_tracker_svc.services.persistence import remove, save

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "createdAt": User.created_at,
    "updatedAt": User.updated_at,
    "name": User.name,
    "email": User.email,
    "role": User.role,
}


def list_users(db: Session, filters: UserFilter) -> UserPage:
    """Return one page of users matching ``filters``, newest first by default."""
    conditions = []
    if filters.search:
        pattern = f"%{filters.search}%"
        conditions.append(or_(User.name.ilike(pattern), User.email.ilike(pattern)))
    if filters.role is not None:
        conditions.append(User.role == filters.role)

    total = db.execute(select(func.count(User.id)).where(*conditions)).scalar_one()

    column = SORT_COLUMNS[filters.sort]
    ordering = (column.asc(), User.id.asc()) if filters.order == "asc" else (column.desc(), User.id.desc())
    stmt = (
        select(User)
        .where(*conditions)
        .order_by(*ordering)
        .offset((filters.page - 1) * filters.limit)
        .limit(filters.limit)
    )
    users = db.execute(stmt).scalars().all()

    return UserPage(
        users=[UserResponse.model_validate(u) for u in users],
        pagination=Pagination(total=total, page=filters.page, pages=page_count(total, filters.limit)),
    )


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def create_user(db: Session, payload: UserCreate) -> User:
    return create_account(db, payload.name, str(payload.email), payload.password, payload.role)


def update_user(db: Session, user_id: int, payload: UserUpdate) -> User:
    """Overwrite only the fields that were sent with a non-empty value.

    The password is re-hashed only when a non-empty one is provided.
    """
    user = get_user(db, user_id)

    if payload.email and payload.email != user.email:
        duplicate = get_user_by_email(db, str(payload.email))
        if duplicate is not None and duplicate.id != user.id:
            raise ConflictError("Email already in use")
        user.email = str(payload.email)

    if payload.name:
        user.name = payload.name

    if payload.role is not None:
        user.role = payload.role

    if payload.password:
        user.hashed_password = security.get_password_hash(payload.password)

    try:
        save(db, user)
    except IntegrityError:
        raise ConflictError("Email already in use")
    return user


def delete_user(db: Session, user_id: int) -> None:
    """Hard-delete a user. Enquiries and activity entries keep the dangling id."""
    user = get_user(db, user_id)
    remove(db, user)
    logger.info("Deleted user %s", user_id)
