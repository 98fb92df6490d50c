"""Pure view models for the month and day grids."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from ..core.dates import format_date, format_month, format_time, is_same_day, minutes_since_midnight, month_grid
from ..core.event_store import EventStore
from ..domain import CalendarEvent

MINUTES_PER_DAY = 24 * 60
MIN_BLOCK_MINUTES = 15
MAX_CELL_EVENTS = 3


@dataclass(frozen=True)
class MonthCell:
    day: date
    is_today: bool
    events: List[CalendarEvent] = field(default_factory=list)

    @property
    def overflow(self) -> int:
        return max(len(self.events) - MAX_CELL_EVENTS, 0)

    @property
    def visible_events(self) -> List[CalendarEvent]:
        return self.events[:MAX_CELL_EVENTS]


@dataclass(frozen=True)
class MonthView:
    year: int
    month: int
    title: str
    weeks: List[List[Optional[MonthCell]]]


@dataclass(frozen=True)
class DayEntry:
    event: CalendarEvent
    label: str
    top_minutes: int
    height_minutes: int

    @property
    def color_key(self) -> str:
        return self.event.type.value


@dataclass(frozen=True)
class DayView:
    day: date
    title: str
    entries: List[DayEntry]
    now_marker_minutes: Optional[int] = None

    @property
    def event_count(self) -> int:
        return len(self.entries)


def build_month_view(store: EventStore, year: int, month: int, *, today: date, locale: str = "ja-JP") -> MonthView:
    by_day: dict[date, List[CalendarEvent]] = {}
    for event in store.events_in_month(year, month):
        by_day.setdefault(event.start.date(), []).append(event)

    weeks = [
        [
            MonthCell(day=day, is_today=day == today, events=by_day.get(day, [])) if day is not None else None
            for day in week
        ]
        for week in month_grid(year, month)
    ]
    return MonthView(year=year, month=month, title=format_month(date(year, month, 1), locale), weeks=weeks)


def _day_entry(event: CalendarEvent) -> DayEntry:
    top = minutes_since_midnight(event.start)
    height = max(event.duration_minutes, MIN_BLOCK_MINUTES)
    label = f"{format_time(event.start)} - {format_time(event.end)}  {event.title}"
    return DayEntry(event=event, label=label, top_minutes=top, height_minutes=min(height, MINUTES_PER_DAY - top))


def build_day_view(store: EventStore, day: date, *, now: datetime, locale: str = "ja-JP") -> DayView:
    entries = [_day_entry(event) for event in store.events_for_day(day)]
    marker = minutes_since_midnight(now) if is_same_day(now, day) else None
    return DayView(day=day, title=format_date(day, locale), entries=entries, now_marker_minutes=marker)


__all__ = ["DayEntry", "DayView", "MonthCell", "MonthView", "build_day_view", "build_month_view"]
