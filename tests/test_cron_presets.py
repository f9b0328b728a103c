"""Tests for predefined cron expressions."""

from datetime import datetime

import pytest

from cronmatch import CronExpression
from cronmatch.presets import (
    DAILY,
    EVERY_MINUTE,
    HOURLY,
    MIDNIGHT,
    MONTHLY,
    OVERNIGHT_HOURLY,
    PRESETS,
    QUARTERLY,
    WEEKDAYS_9AM,
    WEEKENDS_NOON,
    WEEKLY,
    YEARLY,
    ANNUALLY,
    get_preset,
    list_presets,
)


class TestPresetValues:
    """Tests for preset schedules."""

    def test_all_presets_are_valid(self):
        for name, expr in PRESETS.items():
            assert isinstance(expr, CronExpression), name
            assert expr.is_valid(), name

    def test_aliases(self):
        assert ANNUALLY is YEARLY
        assert MIDNIGHT is DAILY

    def test_yearly(self):
        assert YEARLY.get_next(datetime(2024, 6, 1)) == datetime(2025, 1, 1)

    def test_monthly(self):
        assert MONTHLY.get_next(datetime(2024, 1, 15)) == datetime(2024, 2, 1)

    def test_weekly_runs_on_sunday(self):
        assert WEEKLY.get_next(datetime(2024, 1, 15)) == datetime(2024, 1, 21)

    def test_hourly(self):
        assert HOURLY.get_next(datetime(2024, 1, 15, 9, 15)) == datetime(2024, 1, 15, 10, 0)

    def test_every_minute(self):
        assert EVERY_MINUTE.get_next(datetime(2024, 1, 15, 9, 15)) == datetime(2024, 1, 15, 9, 16)

    def test_weekdays_skip_weekend(self):
        # Friday 9:30 -> Monday 9:00
        assert WEEKDAYS_9AM.get_next(datetime(2024, 1, 19, 9, 30)) == datetime(2024, 1, 22, 9, 0)

    def test_weekends_include_sunday(self):
        assert WEEKENDS_NOON.is_matching(datetime(2024, 1, 14, 12, 0))
        assert WEEKENDS_NOON.is_matching(datetime(2024, 1, 13, 12, 0))
        assert not WEEKENDS_NOON.is_matching(datetime(2024, 1, 15, 12, 0))

    def test_overnight_wraps_midnight(self):
        assert OVERNIGHT_HOURLY.get_next(datetime(2024, 1, 15, 23, 0)) == datetime(2024, 1, 16, 0, 0)
        assert OVERNIGHT_HOURLY.get_next(datetime(2024, 1, 16, 4, 0)) == datetime(2024, 1, 16, 22, 0)

    def test_quarterly(self):
        assert QUARTERLY.next_n(4, datetime(2024, 1, 1)) == [
            datetime(2024, 4, 1),
            datetime(2024, 7, 1),
            datetime(2024, 10, 1),
            datetime(2025, 1, 1),
        ]


class TestPresetLookup:
    """Tests for preset registry helpers."""

    @pytest.mark.parametrize("name", ["daily", "DAILY", "Daily"])
    def test_get_preset_case_insensitive(self, name):
        assert get_preset(name) is DAILY

    def test_get_preset_dash(self):
        assert get_preset("weekdays-9am") is WEEKDAYS_9AM

    def test_get_preset_unknown(self):
        assert get_preset("fortnightly") is None

    def test_list_presets(self):
        names = list_presets()
        assert "yearly" in names
        assert "every_5_min" in names
        assert names == list(PRESETS)
