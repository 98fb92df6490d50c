"""Domain models for the OptiPlan calendar."""

from __future__ import annotations

from .enums import FORM_EVENT_TYPES, ChatRole, EventSource, EventType
from .errors import (
    BridgeUnavailable,
    DuplicateEventError,
    EventDataError,
    FormValidationError,
    InvalidTimeRange,
    MalformedToolCall,
    OperationBusy,
    OptiPlanError,
    SyncFailed,
    ToolCallError,
)
from .models import CalendarEvent, ChatMessage, new_id, parse_iso_datetime

__all__ = [
    "FORM_EVENT_TYPES",
    "BridgeUnavailable",
    "CalendarEvent",
    "ChatMessage",
    "ChatRole",
    "DuplicateEventError",
    "EventDataError",
    "EventSource",
    "EventType",
    "FormValidationError",
    "InvalidTimeRange",
    "MalformedToolCall",
    "OperationBusy",
    "OptiPlanError",
    "SyncFailed",
    "ToolCallError",
    "new_id",
    "parse_iso_datetime",
]
