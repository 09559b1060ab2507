"""
Diary generation service.

Turns the plans of :mod:`haccp_journal.core.readings` into rows. Every
function only inserts slots that are still empty, so re-running a generator
for the same device, business or day is a no-op.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from haccp_journal.core.database.base import utc_now
from haccp_journal.core.database.entities.businesses import Business, TemperatureLog
from haccp_journal.core.database.entities.diary import DiaryDevice, TemperatureReading
from haccp_journal.core.database.entities.food import FoodDiary, FoodItem
from haccp_journal.core.database.repositories import (
    FoodDiaryRepository,
    TemperatureLogRepository,
    TemperatureReadingRepository,
)
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.monitoring import log_generation
from haccp_journal.core.readings import (
    BACKFILL_DAYS,
    READING_HOURS,
    backfill_dates,
    plan_device_readings,
    plan_equipment_logs,
    plan_food_diary_slots,
)

logger = get_logger(__name__)


def today() -> date:
    """Current UTC day."""
    return utc_now().date()


async def stage_device_readings(
    session: AsyncSession,
    device: DiaryDevice,
    dates: list[date],
    rng: Optional[random.Random] = None,
) -> int:
    """
    Add the missing readings of a device for ``dates`` to the session.

    Nothing is committed; the caller decides the transaction boundary.

    Returns:
        Number of staged readings
    """
    repo = TemperatureReadingRepository(session)
    existing = await repo.existing_slots(device.id, dates) if device.id is not None else set()
    readings = [
        TemperatureReading(device_id=device.id, reading_date=day, hour=hour, temperature=temperature)
        for day, hour, temperature in plan_device_readings(
            device.min_temp, device.max_temp, dates, READING_HOURS, existing, rng
        )
    ]
    return repo.add_many(readings)


async def backfill_device(
    session: AsyncSession,
    device: DiaryDevice,
    rng: Optional[random.Random] = None,
    days: int = BACKFILL_DAYS,
) -> int:
    """Stage readings for the last ``days`` days (today included) of a new device."""
    staged = await stage_device_readings(session, device, backfill_dates(today(), days), rng)
    log_generation("device_backfill", staged, {"device_id": device.id})
    return staged


@dataclass
class DailyLogsResult:
    """Outcome of a daily temperature log run."""

    log_date: date
    logs_generated: int
    businesses_processed: int


async def generate_daily_logs(
    session: AsyncSession,
    log_date: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> DailyLogsResult:
    """
    Fill the temperature logs of every business for one day and commit.

    Args:
        session: Database session
        log_date: Day to fill, today when omitted
        rng: Random source

    Returns:
        Day, number of inserted logs and number of businesses seen
    """
    log_date = log_date or today()
    repo = TemperatureLogRepository(session)
    result = await session.execute(select(Business).order_by(Business.id))
    businesses = list(result.scalars().all())

    generated = 0
    for business in businesses:
        existing = await repo.logged_items(business.id, log_date)
        generated += repo.add_many(
            TemperatureLog(
                business_id=business.id,
                equipment_type=equipment_type.value,
                equipment_number=number,
                temperature=temperature,
                log_date=log_date,
            )
            for equipment_type, number, temperature in plan_equipment_logs(business, log_date, existing, rng)
        )

    if generated:
        await session.commit()
    log_generation("daily_logs", generated, {"log_date": log_date.isoformat(), "businesses": len(businesses)})
    return DailyLogsResult(log_date=log_date, logs_generated=generated, businesses_processed=len(businesses))


@dataclass
class FoodDiaryResult:
    """Outcome of a food diary run."""

    entries_generated: int
    days_covered: int
    food_items_processed: int
    start_date: date
    end_date: date


async def generate_food_diary(session: AsyncSession, user_id: int, days: int) -> FoodDiaryResult:
    """
    Fill the food diary of a user from ``days`` days ago up to today and commit.

    Each food item gets an entry per slot and day; the recorded temperature
    is the item's cooking temperature.
    """
    end = today()
    start = end - timedelta(days=days)
    dates = [start + timedelta(days=offset) for offset in range(days + 1)]

    repo = FoodDiaryRepository(session)
    result = await session.execute(select(FoodItem).where(FoodItem.user_id == user_id).order_by(FoodItem.id))
    items = list(result.scalars().all())

    generated = 0
    for item in items:
        existing = await repo.existing_slots(item.id, start, end)
        generated += repo.add_many(
            FoodDiary(
                user_id=user_id,
                food_item_id=item.id,
                establishment_id=item.establishment_id,
                date=day,
                time=slot,
                temperature=item.cooking_temperature,
                shelf_life_hours=item.shelf_life_hours,
            )
            for day, slot in plan_food_diary_slots(dates, existing)
        )

    if generated:
        await session.commit()
    log_generation("food_diary", generated, {"user_id": user_id, "days": len(dates)})
    return FoodDiaryResult(
        entries_generated=generated,
        days_covered=len(dates),
        food_items_processed=len(items),
        start_date=start,
        end_date=end,
    )
