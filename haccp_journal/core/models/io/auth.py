"""
Authentication and account I/O models.

Registration creates an inactive user together with its business; login
returns a bearer token once an administrator has activated the account.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.enums import UserRole
from .businesses import BusinessRead
from .common import EmailStr, NonEmptyStr, Password


class UserRead(BaseModel):
    """Account as exposed by the API; never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: UserRole
    manager_name: str
    profile_image_url: Optional[str] = None
    is_active: bool
    created_at: datetime


class RegisterRequest(BaseModel):
    """Self-registration of an owner and their business."""

    email: EmailStr
    password: Password
    manager_name: NonEmptyStr
    profile_image_url: Optional[str] = None
    business_name: NonEmptyStr
    business_type: NonEmptyStr
    city: NonEmptyStr
    address: NonEmptyStr
    phone: NonEmptyStr
    business_email: EmailStr
    eik: Optional[str] = Field(default=None, description="Stored on the business as free text")


class RegisterResponse(BaseModel):
    """Created account and business."""

    message: str
    user: UserRead
    business: BusinessRead


class LoginRequest(BaseModel):
    """Email and password credentials."""

    email: EmailStr
    password: NonEmptyStr


class TokenResponse(BaseModel):
    """Bearer token and the authenticated account."""

    token: str
    token_type: str = "bearer"
    user: UserRead
