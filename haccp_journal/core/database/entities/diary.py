"""
Temperature diary entities.

Diary devices are individual refrigerators, freezers, displays or fryers a
user monitors; each device holds two readings per day.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, TimestampMixin


class DiaryDevice(TimestampMixin, Base, table=True):
    """Monitored device.

    Table: diary_devices
    """

    __tablename__ = "diary_devices"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    establishment_id: Optional[int] = Field(default=None, foreign_key="establishments.id", index=True)

    device_type: str = Field(max_length=50)
    device_name: str = Field(max_length=255)
    min_temp: float
    max_temp: float

    def __repr__(self) -> str:
        return f"DiaryDevice(id={self.id}, name={self.device_name}, type={self.device_type})"


class TemperatureReading(TimestampMixin, Base, table=True):
    """Temperature of a device at a given hour of a day.

    Table: temperature_readings
    """

    __tablename__ = "temperature_readings"
    __table_args__ = (
        UniqueConstraint("device_id", "reading_date", "hour", name="uq_temperature_readings_slot"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    device_id: int = Field(foreign_key="diary_devices.id", index=True)

    reading_date: date = Field(index=True)
    hour: int = Field(ge=0, le=23)
    temperature: float
    notes: Optional[str] = Field(default=None)

    def __repr__(self) -> str:
        return f"TemperatureReading(device_id={self.device_id}, {self.reading_date} {self.hour}:00, {self.temperature})"
