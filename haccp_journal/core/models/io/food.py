"""
Food item and food diary I/O models.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import NonEmptyStr, OwnedCreate, TimeStr


class FoodItemRead(BaseModel):
    """Schema for reading a food item from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    establishment_id: Optional[int] = None
    name: str
    cooking_temperature: Optional[int] = None
    shelf_life_hours: int
    created_at: dt.datetime
    updated_at: dt.datetime


class FoodItemCreate(OwnedCreate):
    """Schema for creating a food item via API."""

    establishment_id: Optional[int] = None
    name: NonEmptyStr
    cooking_temperature: Optional[int] = Field(default=None, description="Core temperature in °C")
    shelf_life_hours: int = Field(gt=0)


class FoodItemUpdate(BaseModel):
    """Schema for updating a food item via API."""

    establishment_id: Optional[int] = None
    name: Optional[NonEmptyStr] = None
    cooking_temperature: Optional[int] = None
    shelf_life_hours: Optional[int] = Field(default=None, gt=0)


class FoodDiaryRead(BaseModel):
    """Schema for reading a food diary entry from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    food_item_id: int
    food_item_name: Optional[str] = None
    establishment_id: Optional[int] = None
    date: dt.date
    time: str
    quantity: Optional[str] = None
    temperature: Optional[int] = None
    shelf_life_hours: int
    notes: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime


class FoodDiaryCreate(OwnedCreate):
    """Schema for recording a preparation via API.

    Temperature and shelf life default to the food item's values.
    """

    food_item_id: int
    date: dt.date
    time: TimeStr
    quantity: Optional[str] = None
    temperature: Optional[int] = None
    notes: Optional[str] = None


class FoodDiaryUpdate(BaseModel):
    """Only quantity, notes and time of an entry can be changed."""

    model_config = ConfigDict(extra="forbid")

    quantity: Optional[str] = None
    notes: Optional[str] = None
    time: Optional[TimeStr] = None


class GenerateFoodDiaryRequest(BaseModel):
    """Number of past days to fill in addition to today."""

    days_to_generate: int = Field(default=20, ge=0, le=365)


class GenerateFoodDiaryResponse(BaseModel):
    """Outcome of a food diary generation run."""

    message: str
    entries_generated: int
    days_covered: int
    food_items_processed: int
    start_date: dt.date
    end_date: dt.date
