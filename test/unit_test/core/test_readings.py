"""Unit tests for synthetic temperature generation and slot planning."""

import random
from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from haccp_journal.core.models.domain.enums import DeviceType, EquipmentType
from haccp_journal.core.readings import (
    BACKFILL_DAYS,
    DEVICE_RANGES,
    EQUIPMENT_RANGES,
    READING_HOURS,
    backfill_dates,
    generate_temperature,
    plan_device_readings,
    plan_equipment_logs,
    plan_food_diary_slots,
)

DAY = date(2024, 5, 20)


class TestGenerateTemperature:
    """Test the bounded temperature draw."""

    @pytest.mark.parametrize("device_type", list(DeviceType))
    def test_device_ranges_are_respected(self, device_type):
        min_temp, max_temp = DEVICE_RANGES[device_type]
        rng = random.Random(7)
        for _ in range(500):
            value = generate_temperature(min_temp, max_temp, rng)
            assert min_temp <= value <= max_temp
            assert round(value, 1) == value

    @pytest.mark.parametrize("equipment_type", list(EquipmentType))
    def test_equipment_ranges_are_respected(self, equipment_type):
        min_temp, max_temp = EQUIPMENT_RANGES[equipment_type]
        rng = random.Random(11)
        for _ in range(200):
            assert min_temp <= generate_temperature(min_temp, max_temp, rng) <= max_temp

    def test_rounding_never_leaves_the_range(self):
        class EdgeRandom(random.Random):
            def uniform(self, a, b):
                return b

        assert generate_temperature(0.0, 3.96, EdgeRandom()) == 3.9

    def test_degenerate_range(self):
        assert generate_temperature(4.0, 4.0) == 4.0

    def test_inverted_range_raises(self):
        with pytest.raises(ValueError):
            generate_temperature(5.0, 1.0)

    def test_range_without_one_decimal_value_raises(self):
        with pytest.raises(ValueError):
            generate_temperature(0.01, 0.09)


class TestBackfillDates:
    """Test the backfill window."""

    def test_default_window_includes_today(self):
        dates = backfill_dates(DAY)
        assert len(dates) == BACKFILL_DAYS
        assert dates[0] == DAY
        assert dates[-1] == DAY - timedelta(days=BACKFILL_DAYS - 1)

    def test_custom_window(self):
        assert backfill_dates(DAY, 2) == [DAY, DAY - timedelta(days=1)]


class TestPlanDeviceReadings:
    """Test reading slot planning."""

    def test_two_readings_per_day(self):
        planned = list(plan_device_readings(0.0, 4.0, [DAY, DAY - timedelta(days=1)], rng=random.Random(1)))
        assert [(d, h) for d, h, _ in planned] == [
            (DAY, READING_HOURS[0]),
            (DAY, READING_HOURS[1]),
            (DAY - timedelta(days=1), READING_HOURS[0]),
            (DAY - timedelta(days=1), READING_HOURS[1]),
        ]
        assert all(0.0 <= t <= 4.0 for _, _, t in planned)

    def test_existing_slots_are_skipped(self):
        planned = list(plan_device_readings(0.0, 4.0, [DAY], existing={(DAY, 10)}))
        assert [(d, h) for d, h, _ in planned] == [(DAY, 17)]

    def test_full_day_yields_nothing(self):
        assert list(plan_device_readings(0.0, 4.0, [DAY], existing={(DAY, 10), (DAY, 17)})) == []


class TestPlanEquipmentLogs:
    """Test daily equipment log planning."""

    def test_one_log_per_counted_item(self):
        business = SimpleNamespace(refrigerator_count=2, freezer_count=1, hot_display_count=0, cold_display_count=1)
        planned = list(plan_equipment_logs(business, DAY, rng=random.Random(3)))
        assert [(kind, number) for kind, number, _ in planned] == [
            (EquipmentType.refrigerator, 1),
            (EquipmentType.refrigerator, 2),
            (EquipmentType.freezer, 1),
            (EquipmentType.cold_display, 1),
        ]
        for kind, _, temperature in planned:
            min_temp, max_temp = EQUIPMENT_RANGES[kind]
            assert min_temp <= temperature <= max_temp

    def test_logged_items_are_skipped(self):
        business = SimpleNamespace(refrigerator_count=2, freezer_count=0, hot_display_count=0, cold_display_count=0)
        existing = {("refrigerator", 1, DAY), ("refrigerator", 2, DAY - timedelta(days=1))}
        planned = list(plan_equipment_logs(business, DAY, existing))
        assert [(kind, number) for kind, number, _ in planned] == [(EquipmentType.refrigerator, 2)]

    def test_missing_counts_mean_no_equipment(self):
        assert list(plan_equipment_logs(SimpleNamespace(), DAY)) == []


class TestPlanFoodDiarySlots:
    """Test food diary slot planning."""

    def test_morning_and_evening_slots(self):
        assert list(plan_food_diary_slots([DAY])) == [(DAY, "08:00"), (DAY, "17:00")]

    def test_existing_slots_are_skipped(self):
        assert list(plan_food_diary_slots([DAY], existing={(DAY, "08:00")})) == [(DAY, "17:00")]
