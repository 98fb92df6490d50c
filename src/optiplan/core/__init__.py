"""Event store, date helpers and seed data."""

from .dates import (
    add_days,
    add_months,
    days_in_month,
    format_date,
    format_month,
    format_time,
    is_same_day,
    month_grid,
)
from .event_store import EventStore
from .seed import generate_seed_events

__all__ = [
    "EventStore",
    "add_days",
    "add_months",
    "days_in_month",
    "format_date",
    "format_month",
    "format_time",
    "generate_seed_events",
    "is_same_day",
    "month_grid",
]
