"""
Establishment and personnel entities.

An establishment is a registered food-service site of a user; personnel rows
record the staff of an establishment and the validity of their health books.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, TimestampMixin


class Establishment(TimestampMixin, Base, table=True):
    """Registered establishment.

    Table: establishments
    """

    __tablename__ = "establishments"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)

    establishment_type: str = Field(max_length=100)
    employee_count: int = Field(gt=0)

    # Manager contact
    manager_name: str = Field(max_length=255)
    manager_phone: str = Field(max_length=50)
    manager_email: str = Field(max_length=255)

    # Company registration
    company_name: str = Field(max_length=255)
    eik: str = Field(max_length=13)
    eik_verified: bool = Field(default=False)
    eik_verification_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    registration_address: str = Field(max_length=500)
    contact_email: str = Field(max_length=255)
    vat_registered: bool = Field(default=False)
    vat_number: Optional[str] = Field(default=None, max_length=20)

    def __repr__(self) -> str:
        return f"Establishment(id={self.id}, company={self.company_name}, user_id={self.user_id})"


class Personnel(TimestampMixin, Base, table=True):
    """Employee of an establishment.

    Table: personnel
    """

    __tablename__ = "personnel"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    establishment_id: int = Field(foreign_key="establishments.id", index=True)

    full_name: str = Field(max_length=255)
    egn: str = Field(max_length=20)
    position: str = Field(max_length=255)
    health_book_image_url: Optional[str] = Field(default=None)
    photo_url: Optional[str] = Field(default=None)
    health_book_number: str = Field(max_length=100)
    health_book_validity: date = Field(index=True)

    def __repr__(self) -> str:
        return f"Personnel(id={self.id}, name={self.full_name}, establishment_id={self.establishment_id})"
