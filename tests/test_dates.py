"""Tests for date helpers used by the views and navigation."""

import calendar
import pytest
from datetime import date, datetime

from optiplan.core.dates import (
    add_days,
    add_months,
    days_in_month,
    format_date,
    format_month,
    format_time,
    is_same_day,
    minutes_since_midnight,
    month_grid,
)


class TestIsSameDay:
    def test_same_day_different_times(self):
        assert is_same_day(datetime(2026, 10, 19, 0, 1), datetime(2026, 10, 19, 23, 59))

    def test_date_and_datetime(self):
        assert is_same_day(date(2026, 10, 19), datetime(2026, 10, 19, 12))

    def test_different_days(self):
        assert not is_same_day(date(2026, 10, 19), date(2026, 10, 20))


class TestDaysInMonth:
    def test_october(self):
        days = days_in_month(2026, 10)
        assert len(days) == 31
        assert days[0] == date(2026, 10, 1)
        assert days[-1] == date(2026, 10, 31)

    def test_leap_february(self):
        assert len(days_in_month(2028, 2)) == 29


class TestMonthGrid:
    def test_sunday_start_padding(self):
        # 1 October 2026 is a Thursday
        weeks = month_grid(2026, 10)
        assert weeks[0][:4] == [None, None, None, None]
        assert weeks[0][4] == date(2026, 10, 1)

    def test_monday_start(self):
        weeks = month_grid(2026, 10, week_start=calendar.MONDAY)
        assert weeks[0][:3] == [None, None, None]
        assert weeks[0][3] == date(2026, 10, 1)

    def test_contains_every_day_once(self):
        cells = [day for week in month_grid(2026, 10) for day in week if day is not None]
        assert cells == days_in_month(2026, 10)


class TestArithmetic:
    @pytest.mark.parametrize(
        "start, delta, expected",
        [
            (date(2026, 10, 19), 1, date(2026, 11, 19)),
            (date(2026, 12, 5), 1, date(2027, 1, 5)),
            (date(2026, 1, 31), 1, date(2026, 2, 28)),
            (date(2026, 3, 15), -3, date(2025, 12, 15)),
        ],
    )
    def test_add_months(self, start, delta, expected):
        assert add_months(start, delta) == expected

    def test_add_days_crosses_month(self):
        assert add_days(date(2026, 10, 31), 1) == date(2026, 11, 1)


class TestFormatting:
    def test_japanese_date(self):
        assert format_date(date(2026, 10, 19), "ja-JP") == "2026年10月19日(月)"

    def test_english_date(self):
        assert format_date(datetime(2026, 10, 19, 9), "en-US") == "Mon, 19 October 2026"

    def test_month_titles(self):
        assert format_month(date(2026, 10, 1), "ja-JP") == "2026年10月"
        assert format_month(date(2026, 10, 1), "en-GB") == "October 2026"

    def test_time(self):
        assert format_time(datetime(2026, 10, 19, 9, 5)) == "09:05"

    def test_minutes_since_midnight(self):
        assert minutes_since_midnight(datetime(2026, 10, 19, 14, 30)) == 870
