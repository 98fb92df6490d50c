"""Tool declarations offered to the model and decoding of the calls it returns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from ..domain import EventType, MalformedToolCall

JsonSchema = Dict[str, Any]

ADD_CALENDAR_EVENT = "add_calendar_event"


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    parameters: JsonSchema

    def as_tool(self) -> Dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


ADD_CALENDAR_EVENT_TOOL = ToolSpec(
    name=ADD_CALENDAR_EVENT,
    description=(
        "Add a new event to the calendar. Use this when the user accepts a suggestion "
        "or asks to schedule something."
    ),
    parameters={
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "Title of the event"},
            "startIso": {"type": "string", "description": "Start time in ISO 8601 format"},
            "endIso": {"type": "string", "description": "End time in ISO 8601 format"},
            "description": {"type": "string", "description": "Description"},
            "type": {
                "type": "string",
                "description": "Type of event",
                "enum": [member.value for member in EventType],
            },
        },
        "required": ["title", "startIso", "endIso"],
    },
)


def get_tool_specs() -> List[ToolSpec]:
    return [ADD_CALENDAR_EVENT_TOOL]


@dataclass(frozen=True)
class RawToolCall:
    """A tool call exactly as the model returned it."""

    name: str
    args: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AddCalendarEventCall:
    title: str
    start_iso: str
    end_iso: str
    description: Optional[str] = None
    type: Optional[str] = None

    name = ADD_CALENDAR_EVENT


@dataclass(frozen=True)
class UnknownToolCall:
    name: str
    args: Mapping[str, Any] = field(default_factory=dict)


ToolInvocation = Union[AddCalendarEventCall, UnknownToolCall]


def _required_string(args: Mapping[str, Any], key: str, tool_name: str) -> str:
    value = args.get(key)
    if not isinstance(value, str) or not value.strip():
        raise MalformedToolCall(f"`{tool_name}` requires a non-empty string for '{key}'.", tool_name=tool_name, args=args)
    return value.strip()


def _optional_string(args: Mapping[str, Any], key: str) -> Optional[str]:
    value = args.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def decode_tool_call(raw: RawToolCall) -> ToolInvocation:
    """Turn a raw call into its typed variant; unknown names are kept for logging."""

    args = raw.args if isinstance(raw.args, Mapping) else {}
    if raw.name != ADD_CALENDAR_EVENT:
        return UnknownToolCall(name=raw.name, args=dict(args))
    return AddCalendarEventCall(
        title=_required_string(args, "title", raw.name),
        start_iso=_required_string(args, "startIso", raw.name),
        end_iso=_required_string(args, "endIso", raw.name),
        description=_optional_string(args, "description"),
        type=_optional_string(args, "type"),
    )


__all__ = [
    "ADD_CALENDAR_EVENT",
    "ADD_CALENDAR_EVENT_TOOL",
    "AddCalendarEventCall",
    "RawToolCall",
    "ToolInvocation",
    "ToolSpec",
    "UnknownToolCall",
    "decode_tool_call",
    "get_tool_specs",
]
