from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from enquiry_tracker_svc.errors import ValidationError

T = TypeVar("T")
F = TypeVar("F", bound=BaseModel)


def _to_utc_iso(value: datetime) -> str:
    # stored timestamps are naive UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


UTCDateTime = Annotated[datetime, PlainSerializer(_to_utc_iso, return_type=str, when_used="json")]


class CamelModel(BaseModel):
    """Base for payloads exchanged with the browser client.

    Serialized with camelCase keys; requests accept either camelCase or
    snake_case keys.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None


class MessageEnvelope(BaseModel):
    """Success envelope without a payload (deletes)."""

    success: bool = True
    message: str


class ErrorEnvelope(BaseModel):
    success: bool = False
    message: str
    errors: Optional[Any] = None


class Pagination(BaseModel):
    total: int
    page: int
    pages: int


def page_count(total: int, limit: int) -> int:
    # ceil without floats
    return -(-total // limit) if limit > 0 else 0


def parse_filter(model: Type[F], **params: Any) -> F:
    """Build a listing filter from raw query values.

    Blank values mean "no filter"; anything else that does not validate
    is a 400.
    """
    cleaned = {k: v for k, v in params.items() if v is not None and v != ""}
    try:
        return model(**cleaned)
    except PydanticValidationError as e:
        raise ValidationError("Validation failed", errors=e.errors(include_url=False)) from e
