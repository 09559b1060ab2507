"""
Diary device and temperature reading repositories.

The reading helpers back the synthetic backfill: they report which
``(date, hour)`` slots of a device already hold a reading so that the
generator only fills the gaps.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.diary import DiaryDevice, TemperatureReading
from .base import AsyncBaseRepository, QueryBuilder


class DiaryDeviceRepository(AsyncBaseRepository[DiaryDevice]):
    """Repository for diary device data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, DiaryDevice)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[DiaryDevice]:
        """List devices, newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: ``user_id``, ``establishment_id``, ``device_type``

        Returns:
            List of DiaryDevice instances
        """
        stmt = select(DiaryDevice)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, DiaryDevice, filters)
        stmt = stmt.order_by(DiaryDevice.created_at.desc(), DiaryDevice.id.desc())  # type: ignore[attr-defined]
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_with_readings(self, device: DiaryDevice) -> None:
        """Delete a device and all of its readings in one transaction."""
        await self.session.execute(delete(TemperatureReading).where(TemperatureReading.device_id == device.id))
        await self.session.delete(device)
        await self.session.commit()


class TemperatureReadingRepository(AsyncBaseRepository[TemperatureReading]):
    """Repository for temperature reading data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TemperatureReading)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[TemperatureReading]:
        """List readings, newest day first and by hour within a day.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: ``device_id``, ``reading_date``, ``start_date``, ``end_date``

        Returns:
            List of TemperatureReading instances
        """
        filters = dict(filters or {})
        start_date = filters.pop("start_date", None)
        end_date = filters.pop("end_date", None)
        stmt = select(TemperatureReading)
        stmt = QueryBuilder.apply_filters(stmt, TemperatureReading, filters)
        if start_date is not None:
            stmt = stmt.where(TemperatureReading.reading_date >= start_date)
        if end_date is not None:
            stmt = stmt.where(TemperatureReading.reading_date <= end_date)
        stmt = stmt.order_by(TemperatureReading.reading_date.desc(), TemperatureReading.hour)  # type: ignore[attr-defined]
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def existing_slots(self, device_id: int, dates: Iterable[date]) -> set[tuple[date, int]]:
        """Return the ``(reading_date, hour)`` pairs a device already has on ``dates``."""
        days = list(dates)
        if not days:
            return set()
        stmt = select(TemperatureReading.reading_date, TemperatureReading.hour).where(
            TemperatureReading.device_id == device_id,
            TemperatureReading.reading_date.in_(days),  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return {(row[0], row[1]) for row in result.all()}

    def add_many(self, readings: Iterable[TemperatureReading]) -> int:
        """Stage readings in the current transaction without committing."""
        rows = list(readings)
        self.session.add_all(rows)
        return len(rows)
