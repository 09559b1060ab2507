"""
Food item and food diary repositories.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.food import FoodDiary, FoodItem
from .base import AsyncBaseRepository, QueryBuilder


class FoodItemRepository(AsyncBaseRepository[FoodItem]):
    """Repository for food item data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, FoodItem)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[FoodItem]:
        """List food items alphabetically.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: ``user_id``, ``establishment_id``

        Returns:
            List of FoodItem instances
        """
        stmt = select(FoodItem)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, FoodItem, filters)
        stmt = stmt.order_by(FoodItem.name, FoodItem.id)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class FoodDiaryRepository(AsyncBaseRepository[FoodDiary]):
    """Repository for food diary data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, FoodDiary)

    def _conditions(self, filters: Dict[str, Any]) -> list:
        conditions = []
        for key in ("user_id", "establishment_id", "food_item_id"):
            if filters.get(key) is not None:
                conditions.append(getattr(FoodDiary, key) == filters[key])
        if filters.get("start_date") is not None:
            conditions.append(FoodDiary.date >= filters["start_date"])
        if filters.get("end_date") is not None:
            conditions.append(FoodDiary.date <= filters["end_date"])
        return conditions

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[FoodDiary]:
        """List diary entries, newest day first and by time within a day.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: ``user_id``, ``establishment_id``, ``food_item_id``,
                ``start_date``, ``end_date``

        Returns:
            List of FoodDiary instances
        """
        stmt = select(FoodDiary)
        for condition in self._conditions(filters or {}):
            stmt = stmt.where(condition)
        stmt = stmt.order_by(FoodDiary.date.desc(), FoodDiary.time)  # type: ignore[attr-defined]
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_matching(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count entries matching the same filters as :meth:`list`."""
        return await self.count(*self._conditions(filters or {}))

    async def existing_slots(self, food_item_id: int, start: date, end: date) -> set[tuple[date, str]]:
        """Return the ``(date, time)`` pairs already recorded for a food item in ``[start, end]``."""
        stmt = select(FoodDiary.date, FoodDiary.time).where(
            FoodDiary.food_item_id == food_item_id,
            FoodDiary.date >= start,
            FoodDiary.date <= end,
        )
        result = await self.session.execute(stmt)
        return {(row[0], row[1]) for row in result.all()}

    def add_many(self, entries: Iterable[FoodDiary]) -> int:
        """Stage entries in the current transaction without committing."""
        rows = list(entries)
        self.session.add_all(rows)
        return len(rows)
