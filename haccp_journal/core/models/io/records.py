"""
Incoming control and cleaning I/O models.

Times are ``HH:MM`` strings; a cleaning log must end after it starts.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from ..domain.enums import Weekday
from .common import NonEmptyStr, OwnedCreate, TimeStr, minutes_of, non_empty_list


class IncomingControlRead(BaseModel):
    """Schema for reading an incoming goods control from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    establishment_id: Optional[int] = None
    control_date: dt.date
    image_url: str
    notes: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime


class IncomingControlCreate(OwnedCreate):
    """Schema for recording an incoming goods control via API."""

    establishment_id: Optional[int] = None
    control_date: dt.date
    image_url: NonEmptyStr
    notes: Optional[str] = None


class IncomingControlUpdate(BaseModel):
    """Schema for updating an incoming goods control via API."""

    establishment_id: Optional[int] = None
    control_date: Optional[dt.date] = None
    image_url: Optional[NonEmptyStr] = None
    notes: Optional[str] = None


class CleaningTemplateRead(BaseModel):
    """Schema for reading a cleaning template from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    establishment_id: Optional[int] = None
    name: str
    days_of_week: List[str]
    cleaning_hours: List[str]
    duration: int
    products: List[str]
    cleaning_areas: List[str]
    employee_id: Optional[int] = None
    created_at: dt.datetime
    updated_at: dt.datetime


class _CleaningTemplateFields(OwnedCreate):
    model_config = ConfigDict(use_enum_values=True)

    @field_validator("days_of_week", check_fields=False)
    @classmethod
    def _days(cls, value: Optional[List[Weekday]]) -> Optional[List[Weekday]]:
        if value is not None and not value:
            raise PydanticCustomError("INVALID_DAYS_OF_WEEK", "daysOfWeek must be a non-empty array")
        return value

    @field_validator("cleaning_hours", check_fields=False)
    @classmethod
    def _hours(cls, value: Optional[List[TimeStr]]) -> Optional[List[TimeStr]]:
        if value is not None and not value:
            raise PydanticCustomError("INVALID_CLEANING_HOURS", "cleaningHours must be a non-empty array")
        return value

    @field_validator("products", check_fields=False)
    @classmethod
    def _products(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return value if value is None else non_empty_list(value, "INVALID_PRODUCTS", "products")

    @field_validator("cleaning_areas", check_fields=False)
    @classmethod
    def _areas(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return value if value is None else non_empty_list(value, "INVALID_CLEANING_AREAS", "cleaningAreas")


class CleaningTemplateCreate(_CleaningTemplateFields):
    """Schema for creating a cleaning template via API."""

    establishment_id: Optional[int] = None
    name: NonEmptyStr
    days_of_week: List[Weekday]
    cleaning_hours: List[TimeStr]
    duration: int = Field(gt=0, description="Minutes")
    products: List[str]
    cleaning_areas: List[str]
    employee_id: Optional[int] = None


class CleaningTemplateUpdate(_CleaningTemplateFields):
    """Schema for updating a cleaning template via API."""

    establishment_id: Optional[int] = None
    name: Optional[NonEmptyStr] = None
    days_of_week: Optional[List[Weekday]] = None
    cleaning_hours: Optional[List[TimeStr]] = None
    duration: Optional[int] = Field(default=None, gt=0)
    products: Optional[List[str]] = None
    cleaning_areas: Optional[List[str]] = None
    employee_id: Optional[int] = None


class CleaningLogRead(BaseModel):
    """Schema for reading a cleaning log from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    establishment_id: Optional[int] = None
    log_date: dt.date
    start_time: str
    end_time: str
    cleaning_areas: List[str]
    products: List[str]
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    notes: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime


class _CleaningLogFields(OwnedCreate):
    @field_validator("products", check_fields=False)
    @classmethod
    def _products(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return value if value is None else non_empty_list(value, "INVALID_PRODUCTS", "products")

    @field_validator("cleaning_areas", check_fields=False)
    @classmethod
    def _areas(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return value if value is None else non_empty_list(value, "INVALID_CLEANING_AREAS", "cleaningAreas")


class CleaningLogCreate(_CleaningLogFields):
    """Schema for recording a cleaning via API."""

    establishment_id: Optional[int] = None
    log_date: dt.date
    start_time: TimeStr
    end_time: TimeStr
    cleaning_areas: List[str]
    products: List[str]
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _time_range(self) -> "CleaningLogCreate":
        if minutes_of(self.end_time) <= minutes_of(self.start_time):
            raise PydanticCustomError("INVALID_TIME_RANGE", "End time must be after start time")
        return self


class CleaningLogUpdate(_CleaningLogFields):
    """Schema for updating a cleaning log via API; the time range is re-checked against stored values."""

    establishment_id: Optional[int] = None
    log_date: Optional[dt.date] = None
    start_time: Optional[TimeStr] = None
    end_time: Optional[TimeStr] = None
    cleaning_areas: Optional[List[str]] = None
    products: Optional[List[str]] = None
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    notes: Optional[str] = None
