"""
Business and temperature log I/O models.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_core import PydanticCustomError

from ..domain.enums import EquipmentType
from .common import EmailStr, NonEmptyStr


class BusinessRead(BaseModel):
    """Schema for reading a business from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    type: str
    city: str
    address: str
    phone: str
    email: str
    refrigerator_count: int
    freezer_count: int
    hot_display_count: int
    cold_display_count: int
    other_equipment: Optional[str] = None
    created_at: dt.datetime


class BusinessUpdate(BaseModel):
    """Partial update of a business; at least one field is required."""

    name: Optional[NonEmptyStr] = None
    type: Optional[NonEmptyStr] = None
    city: Optional[NonEmptyStr] = None
    address: Optional[NonEmptyStr] = None
    phone: Optional[NonEmptyStr] = None
    email: Optional[EmailStr] = None
    refrigerator_count: Optional[int] = Field(default=None, ge=0)
    freezer_count: Optional[int] = Field(default=None, ge=0)
    hot_display_count: Optional[int] = Field(default=None, ge=0)
    cold_display_count: Optional[int] = Field(default=None, ge=0)
    other_equipment: Optional[str] = None

    @model_validator(mode="after")
    def _require_fields(self) -> "BusinessUpdate":
        if not self.model_fields_set:
            raise PydanticCustomError("NO_FIELDS_PROVIDED", "No valid fields provided for update")
        return self


class TemperatureLogRead(BaseModel):
    """Schema for reading a daily equipment temperature."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    business_id: int
    equipment_type: EquipmentType
    equipment_number: int
    temperature: float
    log_date: dt.date
    created_at: dt.datetime


class GenerateLogsRequest(BaseModel):
    """Day to generate temperature logs for; today when omitted."""

    date: Optional[dt.date] = None


class GenerateLogsResponse(BaseModel):
    """Outcome of a daily log generation run."""

    message: str
    date: dt.date
    logs_generated: int
    businesses_processed: int


class CronLogsResponse(GenerateLogsResponse):
    """Daily log generation run triggered by the scheduler."""

    success: bool = True
    timestamp: dt.datetime
