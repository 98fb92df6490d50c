"""Toolkit-independent presentation state: controller, form and view models."""

from __future__ import annotations

from ..core.operations import OperationState, OperationTracker
from .controller import CONNECT_PROMPT_TEXT, CONNECT_PROMPT_TITLE, SYNC_FAILED_MESSAGE, CalendarController, ViewMode
from .forms import AddEventForm
from .views import DayEntry, DayView, MonthCell, MonthView, build_day_view, build_month_view

__all__ = [
    "CONNECT_PROMPT_TEXT",
    "CONNECT_PROMPT_TITLE",
    "SYNC_FAILED_MESSAGE",
    "AddEventForm",
    "CalendarController",
    "DayEntry",
    "DayView",
    "MonthCell",
    "MonthView",
    "OperationState",
    "OperationTracker",
    "ViewMode",
    "build_day_view",
    "build_month_view",
]
