"""Shared test fixtures and configuration.

Environment variables are pinned before any optiplan import so the settings
cache, the dotenv loader and the calendar adapter all run in demo mode.
"""

import os

# Patch env vars BEFORE any optiplan imports
os.environ["GOOGLE_CLIENT_ID"] = ""
os.environ["GOOGLE_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ.setdefault("OPTIPLAN_SYNC_LATENCY", "0")
os.environ.setdefault("OPTIPLAN_LOCALE", "ja-JP")

from datetime import date, datetime

import pytest


TODAY = date(2026, 10, 19)


@pytest.fixture
def today():
    """A fixed Monday used as the anchor for seed and demo events."""
    return TODAY


@pytest.fixture
def now():
    return datetime(2026, 10, 19, 8, 15)


@pytest.fixture
def store():
    from optiplan.core import EventStore
    return EventStore()


@pytest.fixture
def make_event():
    """Factory for calendar events on the fixed day."""
    from optiplan.domain import CalendarEvent, EventSource, EventType

    def _make(title="Event", start=(9, 0), end=(10, 0), day=TODAY, **kwargs):
        kwargs.setdefault("type", EventType.WORK)
        kwargs.setdefault("source", EventSource.LOCAL)
        return CalendarEvent(
            title=title,
            start=datetime.combine(day, datetime.min.time()).replace(hour=start[0], minute=start[1]),
            end=datetime.combine(day, datetime.min.time()).replace(hour=end[0], minute=end[1]),
            **kwargs,
        )

    return _make
