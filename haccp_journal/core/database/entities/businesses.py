"""
Business and temperature log entities.

A business is created together with its owner at registration time and
declares how many refrigerators, freezers and displays it operates. The
daily temperature log holds one row per equipment item and day.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field

from ..base import Base, utc_now


class Business(Base, table=True):
    """Business profile registered with an owner account.

    Table: businesses
    """

    __tablename__ = "businesses"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)

    name: str = Field(max_length=255)
    type: str = Field(max_length=100)
    city: str = Field(max_length=100)
    address: str = Field(max_length=255)
    phone: str = Field(max_length=50)
    email: str = Field(max_length=255)

    # Equipment counts
    refrigerator_count: int = Field(default=0, ge=0)
    freezer_count: int = Field(default=0, ge=0)
    hot_display_count: int = Field(default=0, ge=0)
    cold_display_count: int = Field(default=0, ge=0)
    other_equipment: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"Business(id={self.id}, name={self.name}, user_id={self.user_id})"


class TemperatureLog(Base, table=True):
    """Daily temperature of one equipment item of a business.

    Table: temperature_logs
    """

    __tablename__ = "temperature_logs"
    __table_args__ = (
        UniqueConstraint(
            "business_id", "equipment_type", "equipment_number", "log_date", name="uq_temperature_logs_item_day"
        ),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    business_id: int = Field(foreign_key="businesses.id", index=True)

    equipment_type: str = Field(max_length=20, description="refrigerator, freezer, hot_display or cold_display")
    equipment_number: int = Field(ge=1)
    temperature: float
    log_date: date = Field(index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return (
            f"TemperatureLog(id={self.id}, business_id={self.business_id}, "
            f"{self.equipment_type}#{self.equipment_number}, date={self.log_date})"
        )
