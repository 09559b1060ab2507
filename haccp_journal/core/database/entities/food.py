"""
Food item and food diary entities.

Food items are the dishes a user prepares; the diary records when a dish was
prepared, at which core temperature and for how long it may be kept.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, TimestampMixin


class FoodItem(TimestampMixin, Base, table=True):
    """Dish prepared by a user.

    Table: food_items
    """

    __tablename__ = "food_items"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    establishment_id: Optional[int] = Field(default=None, foreign_key="establishments.id", index=True)

    name: str = Field(max_length=255)
    cooking_temperature: Optional[int] = Field(default=None)
    shelf_life_hours: int = Field(gt=0)

    def __repr__(self) -> str:
        return f"FoodItem(id={self.id}, name={self.name})"


class FoodDiary(TimestampMixin, Base, table=True):
    """Preparation record of a food item.

    Table: food_diary
    """

    __tablename__ = "food_diary"
    __table_args__ = (
        UniqueConstraint("food_item_id", "date", "time", name="uq_food_diary_slot"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    food_item_id: int = Field(foreign_key="food_items.id", index=True)
    establishment_id: Optional[int] = Field(default=None, foreign_key="establishments.id", index=True)

    date: dt.date = Field(index=True)
    time: str = Field(max_length=5)
    quantity: Optional[str] = Field(default=None, max_length=100)
    temperature: Optional[int] = Field(default=None)
    shelf_life_hours: int
    notes: Optional[str] = Field(default=None)

    def __repr__(self) -> str:
        return f"FoodDiary(id={self.id}, food_item_id={self.food_item_id}, {self.date} {self.time})"
