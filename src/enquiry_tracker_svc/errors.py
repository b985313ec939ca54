from __future__ import annotations

from typing import Any, Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP status and envelope."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Any = None) -> None:
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Validation failed"


class ConflictError(AppError):
    status_code = 400
    default_message = "Email already in use"


class InvalidCredentialsError(AppError):
    # same message for unknown email and wrong password
    status_code = 400
    default_message = "Invalid credentials"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Could not validate credentials"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Forbidden: insufficient permissions"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"
