"""Assistant bridge, tool executor and chat session."""

from __future__ import annotations

from .tools import (
    ADD_CALENDAR_EVENT,
    ADD_CALENDAR_EVENT_TOOL,
    AddCalendarEventCall,
    RawToolCall,
    ToolInvocation,
    ToolSpec,
    UnknownToolCall,
    decode_tool_call,
    get_tool_specs,
)
from .bridge import AssistantBridge, BridgeReply
from .executor import ToolExecutor, TurnOutcome, confirmation_line
from .session import ChatSession

__all__ = [
    "ADD_CALENDAR_EVENT",
    "ADD_CALENDAR_EVENT_TOOL",
    "AddCalendarEventCall",
    "AssistantBridge",
    "BridgeReply",
    "ChatSession",
    "RawToolCall",
    "ToolExecutor",
    "ToolInvocation",
    "ToolSpec",
    "TurnOutcome",
    "UnknownToolCall",
    "confirmation_line",
    "decode_tool_call",
    "get_tool_specs",
]
