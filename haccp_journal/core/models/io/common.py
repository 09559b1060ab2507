"""
Shared field types for API request and response schemas.

Validation failures are reported by the server as ``MISSING_<FIELD>`` or
``INVALID_<FIELD>``. Validators that need a more specific code raise
``PydanticCustomError`` whose error type is the upper-case code itself.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Generic, List, TypeVar

from pydantic import AfterValidator, BaseModel, StringConstraints, model_validator
from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TIME_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"


def _normalize_email(value: str) -> str:
    email = value.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")
    return email


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
EmailStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1), AfterValidator(_normalize_email)]
TimeStr = Annotated[str, StringConstraints(strip_whitespace=True, pattern=TIME_PATTERN)]
Password = Annotated[str, StringConstraints(min_length=6)]


def non_empty_list(values: List[str], code: str, label: str) -> List[str]:
    """Strip items, drop blanks and reject an empty result with ``code``."""
    cleaned = [v.strip() for v in values if v and v.strip()]
    if not cleaned:
        raise PydanticCustomError(code, "{label} must be a non-empty array", {"label": label})
    return cleaned


def minutes_of(time_value: str) -> int:
    """Minutes since midnight of an ``HH:MM`` string."""
    hours, minutes = time_value.split(":")
    return int(hours) * 60 + int(minutes)


class OwnedCreate(BaseModel):
    """Body of a row owned by the caller; the owner always comes from the token."""

    @model_validator(mode="before")
    @classmethod
    def _reject_owner(cls, data: Any) -> Any:
        if isinstance(data, dict) and ("user_id" in data or "userId" in data):
            raise PydanticCustomError("USER_ID_NOT_ALLOWED", "User ID cannot be provided in request body")
        return data


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class DeletedResponse(BaseModel):
    """Acknowledgement of a deletion."""

    message: str
    id: int


ItemType = TypeVar("ItemType")


class Page(BaseModel, Generic[ItemType]):
    """A page of results together with the total number of matches."""

    items: List[ItemType]
    total: int
    limit: int
    offset: int


def changes_of(update: BaseModel, nullable: frozenset[str] = frozenset()) -> dict[str, Any]:
    """Fields explicitly set on an update schema; ``null`` only counts for ``nullable`` columns."""
    return {
        key: value
        for key, value in update.model_dump(exclude_unset=True).items()
        if value is not None or key in nullable
    }
