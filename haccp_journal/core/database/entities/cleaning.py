"""
Cleaning schedule entities.

Templates describe recurring cleaning (days, hours, areas and products);
logs record cleaning that actually took place.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import JSON
from sqlmodel import Field

from ..base import Base, TimestampMixin


class CleaningTemplate(TimestampMixin, Base, table=True):
    """Recurring cleaning plan.

    Table: cleaning_templates
    """

    __tablename__ = "cleaning_templates"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    establishment_id: Optional[int] = Field(default=None, foreign_key="establishments.id", index=True)

    name: str = Field(max_length=255)
    days_of_week: List[str] = Field(default_factory=list, sa_type=JSON)
    cleaning_hours: List[str] = Field(default_factory=list, sa_type=JSON)
    duration: int = Field(gt=0, description="Minutes")
    products: List[str] = Field(default_factory=list, sa_type=JSON)
    cleaning_areas: List[str] = Field(default_factory=list, sa_type=JSON)
    employee_id: Optional[int] = Field(default=None, foreign_key="personnel.id")

    def __repr__(self) -> str:
        return f"CleaningTemplate(id={self.id}, name={self.name})"


class CleaningLog(TimestampMixin, Base, table=True):
    """Performed cleaning.

    Table: cleaning_logs
    """

    __tablename__ = "cleaning_logs"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    establishment_id: Optional[int] = Field(default=None, foreign_key="establishments.id", index=True)

    log_date: date = Field(index=True)
    start_time: str = Field(max_length=5)
    end_time: str = Field(max_length=5)
    cleaning_areas: List[str] = Field(default_factory=list, sa_type=JSON)
    products: List[str] = Field(default_factory=list, sa_type=JSON)
    employee_id: Optional[int] = Field(default=None, foreign_key="personnel.id")
    employee_name: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None)

    def __repr__(self) -> str:
        return f"CleaningLog(id={self.id}, date={self.log_date}, {self.start_time}-{self.end_time})"
