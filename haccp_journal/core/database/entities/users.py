"""
User account entity.

Accounts are created inactive by self-registration and must be activated by
an administrator before they can log in.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, utc_now


class User(Base, table=True):
    """Registered account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    # Credentials
    email: str = Field(max_length=255, unique=True, index=True, description="Lower-cased login email")
    password_hash: str = Field(max_length=255, description="bcrypt hash")
    role: str = Field(default="user", max_length=20, description="admin, moderator or user")

    # Profile
    manager_name: str = Field(max_length=255)
    profile_image_url: Optional[str] = Field(default=None)
    is_active: bool = Field(default=False, description="Set by an administrator")

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"
