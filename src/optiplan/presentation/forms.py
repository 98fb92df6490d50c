from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Union

from ..domain import FORM_EVENT_TYPES, CalendarEvent, EventSource, EventType, FormValidationError


def _parse_date(value: Union[str, date]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError) as exc:
        raise FormValidationError(f"Invalid date: {value!r}", field="date") from exc


def _parse_time(value: Union[str, time], field_name: str) -> time:
    if isinstance(value, time):
        return value
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except (AttributeError, ValueError) as exc:
        raise FormValidationError(f"Invalid time for {field_name}: {value!r} (expected HH:MM)", field=field_name) from exc


@dataclass
class AddEventForm:
    """Values of the "add event" form, validated into a local calendar event."""

    title: str = ""
    date: Union[str, date] = field(default_factory=date.today)
    start_time: Union[str, time] = "09:00"
    end_time: Union[str, time] = "10:00"
    category: Union[str, EventType] = EventType.WORK
    note: str = ""

    @classmethod
    def for_day(cls, day: date) -> "AddEventForm":
        return cls(date=day)

    def validate(self) -> CalendarEvent:
        title = (self.title or "").strip()
        if not title:
            raise FormValidationError("Title is required.", field="title")
        day = _parse_date(self.date)
        start = datetime.combine(day, _parse_time(self.start_time, "start_time"))
        end = datetime.combine(day, _parse_time(self.end_time, "end_time"))
        category = EventType.coerce(self.category)
        if category not in FORM_EVENT_TYPES:
            raise FormValidationError(f"Unsupported category: {self.category!r}", field="category")
        if end <= start:
            raise FormValidationError("End time must be later than start time.", field="end_time")
        return CalendarEvent(
            title=title,
            start=start,
            end=end,
            type=category,
            source=EventSource.LOCAL,
            description=(self.note or "").strip() or None,
        )


__all__ = ["AddEventForm"]
