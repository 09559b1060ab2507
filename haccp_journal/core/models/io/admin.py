"""
Administration I/O models.

Account management by administrators; listing endpoints reuse the read
schemas of the resources wrapped in :class:`~.common.Page`.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic_core import PydanticCustomError

from ..domain.enums import UserRole
from .common import EmailStr, NonEmptyStr, Password


class AdminUserCreate(BaseModel):
    """Account created by an administrator; active unless stated otherwise."""

    model_config = ConfigDict(use_enum_values=True)

    email: EmailStr
    password: Password
    role: UserRole
    manager_name: NonEmptyStr
    profile_image_url: Optional[str] = None
    is_active: bool = True


class AdminUserUpdate(BaseModel):
    """Partial account update; a new password is hashed before storing."""

    model_config = ConfigDict(use_enum_values=True)

    email: Optional[EmailStr] = None
    password: Optional[Password] = None
    role: Optional[UserRole] = None
    manager_name: Optional[NonEmptyStr] = None
    profile_image_url: Optional[str] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def _require_fields(self) -> "AdminUserUpdate":
        if not self.model_fields_set:
            raise PydanticCustomError("NO_UPDATE_FIELDS", "At least one field must be provided for update")
        return self


class ActivationRequest(BaseModel):
    """New activation state of an account."""

    is_active: bool
