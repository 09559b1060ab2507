"""Incoming goods control entity."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import Field

from ..base import Base, TimestampMixin


class IncomingControl(TimestampMixin, Base, table=True):
    """Photo record of an incoming goods inspection.

    Table: incoming_controls
    """

    __tablename__ = "incoming_controls"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    establishment_id: Optional[int] = Field(default=None, foreign_key="establishments.id", index=True)

    control_date: date = Field(index=True)
    image_url: str
    notes: Optional[str] = Field(default=None)

    def __repr__(self) -> str:
        return f"IncomingControl(id={self.id}, date={self.control_date}, user_id={self.user_id})"
