"""Exception taxonomy shared by the store, the assistant and the presentation layer."""

from __future__ import annotations

from typing import Any, Mapping, Optional


class OptiPlanError(Exception):
    """Base class for every error raised by OptiPlan."""


class EventDataError(OptiPlanError, ValueError):
    """A calendar event was built from invalid data."""


class DuplicateEventError(EventDataError):
    def __init__(self, event_id: str) -> None:
        super().__init__(f"Event '{event_id}' already exists in the store.")
        self.event_id = event_id


class BridgeUnavailable(OptiPlanError):
    """The assistant endpoint could not be reached or answered with garbage."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ToolCallError(OptiPlanError):
    def __init__(self, message: str, *, tool_name: str = "", args: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.tool_name = tool_name
        self.args = dict(args or {})


class MalformedToolCall(ToolCallError):
    """Required tool arguments are missing, mistyped or unparsable."""


class InvalidTimeRange(ToolCallError, EventDataError):
    """The end of an event is not strictly after its start."""


class SyncFailed(OptiPlanError):
    """The external calendar could not be authorized or listed."""


class FormValidationError(OptiPlanError):
    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class OperationBusy(OptiPlanError):
    def __init__(self, operation: str) -> None:
        super().__init__(f"'{operation}' is already in flight.")
        self.operation = operation
