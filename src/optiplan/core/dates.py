from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from ..domain import parse_iso_datetime

DateLike = Union[date, datetime]

_JA_WEEKDAYS = ("月", "火", "水", "木", "金", "土", "日")
_EN_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_EN_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def _as_date(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def _is_japanese(locale: str) -> bool:
    return locale.lower().replace("_", "-").startswith("ja")


def is_same_day(first: DateLike, second: DateLike) -> bool:
    return _as_date(first) == _as_date(second)


def days_in_month(year: int, month: int) -> List[date]:
    _, last_day = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, last_day + 1)]


def month_grid(year: int, month: int, *, week_start: int = calendar.SUNDAY) -> List[List[Optional[date]]]:
    """Return the month as week rows, padded with ``None`` outside the month."""

    weeks = calendar.Calendar(firstweekday=week_start).monthdatescalendar(year, month)
    return [[day if day.month == month else None for day in week] for week in weeks]


def add_months(value: date, delta: int) -> date:
    month_index = value.month - 1 + delta
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def add_days(value: date, delta: int) -> date:
    return value + timedelta(days=delta)


def format_date(value: DateLike, locale: str = "ja-JP") -> str:
    day = _as_date(value)
    if _is_japanese(locale):
        return f"{day.year}年{day.month}月{day.day}日({_JA_WEEKDAYS[day.weekday()]})"
    return f"{_EN_WEEKDAYS[day.weekday()]}, {day.day} {_EN_MONTHS[day.month - 1]} {day.year}"


def format_month(value: DateLike, locale: str = "ja-JP") -> str:
    day = _as_date(value)
    if _is_japanese(locale):
        return f"{day.year}年{day.month}月"
    return f"{_EN_MONTHS[day.month - 1]} {day.year}"


def format_time(value: datetime) -> str:
    return value.strftime("%H:%M")


def minutes_since_midnight(value: datetime) -> int:
    return value.hour * 60 + value.minute


__all__ = [
    "add_days",
    "add_months",
    "days_in_month",
    "format_date",
    "format_month",
    "format_time",
    "is_same_day",
    "minutes_since_midnight",
    "month_grid",
    "parse_iso_datetime",
]
