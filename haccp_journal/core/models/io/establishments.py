"""
Establishment and personnel I/O models.

This module contains Pydantic-based I/O schemas for establishment and
personnel API endpoints, including the EIK validation request.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.enums import EstablishmentType
from .common import EmailStr, NonEmptyStr, OwnedCreate


class EstablishmentRead(BaseModel):
    """Schema for reading an establishment from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    establishment_type: EstablishmentType
    employee_count: int
    manager_name: str
    manager_phone: str
    manager_email: str
    company_name: str
    eik: str
    eik_verified: bool
    eik_verification_date: Optional[dt.datetime] = None
    registration_address: str
    contact_email: str
    vat_registered: bool
    vat_number: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime


class EstablishmentCreate(OwnedCreate):
    """Schema for registering an establishment via API."""

    model_config = ConfigDict(use_enum_values=True)

    establishment_type: EstablishmentType = Field(description="One of the registered establishment categories")
    employee_count: int = Field(gt=0, description="Number of employees")
    manager_name: NonEmptyStr
    manager_phone: NonEmptyStr
    manager_email: EmailStr
    company_name: NonEmptyStr
    eik: NonEmptyStr = Field(description="9 or 13 digit company identifier")
    registration_address: NonEmptyStr
    contact_email: EmailStr
    vat_registered: bool = False
    vat_number: Optional[str] = None


class EstablishmentUpdate(BaseModel):
    """Schema for updating an establishment via API."""

    model_config = ConfigDict(use_enum_values=True)

    establishment_type: Optional[EstablishmentType] = None
    employee_count: Optional[int] = Field(default=None, gt=0)
    manager_name: Optional[NonEmptyStr] = None
    manager_phone: Optional[NonEmptyStr] = None
    manager_email: Optional[EmailStr] = None
    company_name: Optional[NonEmptyStr] = None
    eik: Optional[NonEmptyStr] = None
    registration_address: Optional[NonEmptyStr] = None
    contact_email: Optional[EmailStr] = None
    vat_registered: Optional[bool] = None
    vat_number: Optional[str] = None


class EikValidationRequest(BaseModel):
    """EIK to check."""

    eik: Optional[str] = None


class EikValidationResponse(BaseModel):
    """Result of an EIK checksum verification."""

    valid: bool
    message: str
    company_name: Optional[str] = None


class PersonnelRead(BaseModel):
    """Schema for reading an employee from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    establishment_id: int
    full_name: str
    egn: str
    position: str
    health_book_image_url: Optional[str] = None
    photo_url: Optional[str] = None
    health_book_number: str
    health_book_validity: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime


class PersonnelCreate(BaseModel):
    """Schema for adding an employee via API."""

    establishment_id: int
    full_name: NonEmptyStr
    egn: NonEmptyStr
    position: NonEmptyStr
    health_book_image_url: Optional[str] = None
    photo_url: Optional[str] = None
    health_book_number: NonEmptyStr
    health_book_validity: dt.date = Field(description="YYYY-MM-DD")


class PersonnelUpdate(BaseModel):
    """Schema for updating an employee via API."""

    full_name: Optional[NonEmptyStr] = None
    egn: Optional[NonEmptyStr] = None
    position: Optional[NonEmptyStr] = None
    health_book_image_url: Optional[str] = None
    photo_url: Optional[str] = None
    health_book_number: Optional[NonEmptyStr] = None
    health_book_validity: Optional[dt.date] = None


class EstablishmentDetail(BaseModel):
    """Establishment together with its personnel."""

    establishment: EstablishmentRead
    personnel: List[PersonnelRead]


class ExpiringHealthBook(PersonnelRead):
    """Employee whose health book expires soon."""

    days_until_expiry: int
    company_name: str
    contact_email: str
