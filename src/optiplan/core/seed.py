from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import List, Optional

from ..domain import CalendarEvent, EventSource, EventType


def _at(day: date, offset_days: int, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(day + timedelta(days=offset_days), time(hour, minute))


def generate_seed_events(today: Optional[date] = None) -> List[CalendarEvent]:
    """Sample local events shown on first launch, anchored on ``today``."""

    anchor = today or date.today()
    samples = (
        ("Weekly meeting", EventType.WORK, 0, (10, 0), (11, 0)),
        ("Project A review", EventType.WORK, 0, (14, 0), (15, 30)),
        ("Gym", EventType.PERSONAL, 1, (18, 0), (19, 30)),
        ("Lunch with Tanaka", EventType.PERSONAL, 2, (12, 0), (13, 0)),
    )
    return [
        CalendarEvent(
            title=title,
            start=_at(anchor, offset, *start),
            end=_at(anchor, offset, *end),
            type=event_type,
            source=EventSource.LOCAL,
        )
        for title, event_type, offset, start, end in samples
    ]


__all__ = ["generate_seed_events"]
