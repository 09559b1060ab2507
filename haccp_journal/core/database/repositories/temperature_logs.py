"""
Business temperature log repository.

Besides the filtered listing, it reports which equipment items of a business
were already logged on a day (used by the daily generator) and deletes all
logs of a business when the business itself is removed.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.businesses import TemperatureLog
from .base import AsyncBaseRepository, QueryBuilder


class TemperatureLogRepository(AsyncBaseRepository[TemperatureLog]):
    """Repository for temperature log data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TemperatureLog)

    def _conditions(self, filters: Dict[str, Any]) -> list:
        conditions = []
        for key in ("business_id", "equipment_type"):
            if filters.get(key) is not None:
                conditions.append(getattr(TemperatureLog, key) == filters[key])
        if filters.get("start_date") is not None:
            conditions.append(TemperatureLog.log_date >= filters["start_date"])
        if filters.get("end_date") is not None:
            conditions.append(TemperatureLog.log_date <= filters["end_date"])
        return conditions

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[TemperatureLog]:
        """List logs ordered by day (newest first), equipment type and number.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: ``business_id``, ``equipment_type``, ``start_date``, ``end_date``

        Returns:
            List of TemperatureLog instances
        """
        stmt = select(TemperatureLog)
        for condition in self._conditions(filters or {}):
            stmt = stmt.where(condition)
        stmt = stmt.order_by(
            TemperatureLog.log_date.desc(),  # type: ignore[attr-defined]
            TemperatureLog.equipment_type,
            TemperatureLog.equipment_number,
        )
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_matching(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count logs matching the same filters as :meth:`list`."""
        return await self.count(*self._conditions(filters or {}))

    async def logged_items(self, business_id: int, log_date: date) -> set[tuple[str, int, date]]:
        """Return ``(equipment_type, equipment_number, log_date)`` already logged for a business on a day."""
        stmt = select(TemperatureLog.equipment_type, TemperatureLog.equipment_number).where(
            TemperatureLog.business_id == business_id,
            TemperatureLog.log_date == log_date,
        )
        result = await self.session.execute(stmt)
        return {(row[0], row[1], log_date) for row in result.all()}

    def add_many(self, logs: Iterable[TemperatureLog]) -> int:
        """Stage logs in the current transaction without committing."""
        rows = list(logs)
        self.session.add_all(rows)
        return len(rows)

    async def delete_for_business(self, business_id: int) -> int:
        """Delete every log of a business inside the current transaction."""
        result = await self.session.execute(delete(TemperatureLog).where(TemperatureLog.business_id == business_id))
        return result.rowcount or 0
