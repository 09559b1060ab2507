"""
Synthetic temperature generation.

Diaries for newly registered equipment are backfilled with plausible
readings: a value drawn uniformly from the device's allowed range and rounded
to one decimal place. Planning helpers only emit slots that are not already
recorded, so running a generator twice for the same date never creates
duplicates.
"""

from __future__ import annotations

import math
import random
from datetime import date, timedelta
from typing import Any, Collection, Iterator, Optional

from haccp_journal.core.models.domain.enums import DeviceType, EquipmentType

READING_HOURS = (10, 17)
BACKFILL_DAYS = 15
FOOD_DIARY_SLOTS = ("08:00", "17:00")

DEVICE_RANGES: dict[DeviceType, tuple[float, float]] = {
    DeviceType.freezer: (-36.0, -18.0),
    DeviceType.refrigerator: (0.0, 4.0),
    DeviceType.hot_display: (63.0, 80.0),
    DeviceType.fryer: (160.0, 180.0),
}

EQUIPMENT_RANGES: dict[EquipmentType, tuple[float, float]] = {
    EquipmentType.refrigerator: (0.0, 4.0),
    EquipmentType.freezer: (-36.0, -18.0),
    EquipmentType.hot_display: (63.0, 80.0),
    EquipmentType.cold_display: (0.0, 4.0),
}

# Business attribute holding the item count of each equipment type
EQUIPMENT_COUNT_FIELDS: dict[EquipmentType, str] = {
    EquipmentType.refrigerator: "refrigerator_count",
    EquipmentType.freezer: "freezer_count",
    EquipmentType.hot_display: "hot_display_count",
    EquipmentType.cold_display: "cold_display_count",
}


def generate_temperature(min_temp: float, max_temp: float, rng: Optional[random.Random] = None) -> float:
    """
    Draw a temperature uniformly from ``[min_temp, max_temp]``.

    The value is rounded to one decimal place and clamped so that rounding
    never pushes it outside the inclusive range.

    Args:
        min_temp: Lower bound (inclusive)
        max_temp: Upper bound (inclusive)
        rng: Random source, the module-level generator when omitted

    Returns:
        A float with at most one decimal digit inside the range

    Raises:
        ValueError: If the range is inverted or holds no one-decimal value
    """
    if min_temp > max_temp:
        raise ValueError(f"min_temp {min_temp} is greater than max_temp {max_temp}")

    low = math.ceil(round(min_temp * 10, 6))
    high = math.floor(round(max_temp * 10, 6))
    if low > high:
        raise ValueError(f"no one-decimal value between {min_temp} and {max_temp}")

    source = rng or random
    tenths = round(source.uniform(min_temp, max_temp) * 10)
    tenths = min(max(tenths, low), high)
    return tenths / 10


def backfill_dates(today: date, days: int = BACKFILL_DAYS) -> list[date]:
    """Return ``today`` and the ``days - 1`` days before it, newest first."""
    return [today - timedelta(days=offset) for offset in range(days)]


def plan_device_readings(
    min_temp: float,
    max_temp: float,
    dates: list[date],
    hours: tuple[int, ...] = READING_HOURS,
    existing: Collection[tuple[date, int]] = (),
    rng: Optional[random.Random] = None,
) -> Iterator[tuple[date, int, float]]:
    """
    Yield ``(date, hour, temperature)`` for every slot not in ``existing``.

    Args:
        min_temp: Lower bound of the device range
        max_temp: Upper bound of the device range
        dates: Days to cover
        hours: Hours of the day a reading is taken
        existing: ``(date, hour)`` pairs already recorded for the device
        rng: Random source
    """
    taken = set(existing)
    for day in dates:
        for hour in hours:
            if (day, hour) in taken:
                continue
            yield day, hour, generate_temperature(min_temp, max_temp, rng)


def plan_equipment_logs(
    business: Any,
    log_date: date,
    existing: Collection[tuple[str, int, date]] = (),
    rng: Optional[random.Random] = None,
) -> Iterator[tuple[EquipmentType, int, float]]:
    """
    Yield ``(equipment_type, equipment_number, temperature)`` for a business.

    Every counted item (numbered from 1) of every equipment type gets one log
    per day; items already logged on ``log_date`` are skipped.

    Args:
        business: Object exposing the ``*_count`` attributes
        log_date: Day being logged
        existing: Already logged ``(equipment_type, equipment_number, log_date)`` triples
        rng: Random source
    """
    taken = {
        (str(getattr(kind, "value", kind)), number) for kind, number, logged_on in existing if logged_on == log_date
    }
    for equipment_type, field in EQUIPMENT_COUNT_FIELDS.items():
        count = getattr(business, field, 0) or 0
        min_temp, max_temp = EQUIPMENT_RANGES[equipment_type]
        for number in range(1, count + 1):
            if (equipment_type.value, number) in taken:
                continue
            yield equipment_type, number, generate_temperature(min_temp, max_temp, rng)


def plan_food_diary_slots(
    dates: list[date],
    existing: Collection[tuple[date, str]] = (),
    slots: tuple[str, ...] = FOOD_DIARY_SLOTS,
) -> Iterator[tuple[date, str]]:
    """Yield ``(date, time)`` food diary slots that are not yet recorded."""
    taken = set(existing)
    for day in dates:
        for slot in slots:
            if (day, slot) not in taken:
                yield day, slot
