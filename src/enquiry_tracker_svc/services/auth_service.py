import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import enquiry_tracker_svc.utils.security as security
from enquiry_tracker_svc.errors import ConflictError, InvalidCredentialsError, NotFoundError
from enquiry_tracker_svc.models import User, UserRole
from enquiry_tracker_svc.schemas.auth import LoginResponse, RegisterRequest
from enquiry_tracker_svc.schemas.user import UserSummary
from enquiry_tracker_svc.services.persistence import save

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def create_account(db: Session, name: str, email: str, password: str, role: UserRole = UserRole.Staff) -> User:
    """Persist a new user with a hashed password.

    Raises ConflictError when the email is already registered.
    """
    if get_user_by_email(db, email) is not None:
        raise ConflictError("Email already in use")

    user = User(
        name=name,
        email=email,
        hashed_password=security.get_password_hash(password),
        role=role,
    )
    try:
        save(db, user)
    except IntegrityError:
        # lost a race with a concurrent insert of the same email
        raise ConflictError("Email already in use")

    logger.info("Created %s account %s", user.role.value, user.id)
    return user


def register(db: Session, payload: RegisterRequest) -> User:
    """Self-service registration; new accounts are always staff."""
    return create_account(db, payload.name, str(payload.email), payload.password, UserRole.Staff)


def login(db: Session, email: str, password: str) -> LoginResponse:
    """Check credentials and issue an access token carrying ``id`` and ``role``.

    Unknown email and wrong password raise the same InvalidCredentialsError.
    """
    user = get_user_by_email(db, email)
    if user is None:
        raise InvalidCredentialsError()

    try:
        verified = security.verify_password(password, user.hashed_password)
    except ValueError as e:
        logger.error(e, exc_info=True)
        verified = False

    if not verified:
        raise InvalidCredentialsError()

    token = security.create_access_token({"id": user.id, "role": user.role.value})
    return LoginResponse(token=token, user=UserSummary.model_validate(user))


def me(db: Session, subject_id: int) -> User:
    user = db.get(User, subject_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
