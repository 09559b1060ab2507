"""
Diary device and temperature reading I/O models.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.enums import DeviceType
from .common import NonEmptyStr, OwnedCreate


class DiaryDeviceRead(BaseModel):
    """Schema for reading a diary device from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    establishment_id: Optional[int] = None
    device_type: DeviceType
    device_name: str
    min_temp: float
    max_temp: float
    created_at: dt.datetime
    updated_at: dt.datetime


class DiaryDeviceCreate(OwnedCreate):
    """Schema for registering a diary device via API.

    The temperature range is derived from the device type.
    """

    model_config = ConfigDict(use_enum_values=True)

    establishment_id: int
    device_type: DeviceType
    device_name: NonEmptyStr


class DiaryDeviceUpdate(BaseModel):
    """Only the name of a device can be changed."""

    device_name: NonEmptyStr


class DiaryDeviceCreated(DiaryDeviceRead):
    """Created device and the number of backfilled readings."""

    readings_generated: int


class TemperatureReadingRead(BaseModel):
    """Schema for reading a temperature reading from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    device_id: int
    reading_date: dt.date
    hour: int
    temperature: float
    notes: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime


class ReadingNotesUpdate(BaseModel):
    """Notes attached to a reading; ``null`` clears them."""

    notes: Optional[str] = Field(default=None, max_length=2000)


class GenerateReadingsRequest(BaseModel):
    """Device and day to fill with readings."""

    device_id: int
    date: dt.date


class GenerateReadingsResponse(BaseModel):
    """Outcome of a reading generation run."""

    message: str
    device_id: int
    date: dt.date
    readings_generated: int
