from __future__ import annotations

from enum import Enum
from typing import Optional


class EventType(str, Enum):
    WORK = "work"
    PERSONAL = "personal"
    MEETING = "meeting"
    AI_SUGGESTED = "ai-suggested"
    EXTERNAL = "external"

    @classmethod
    def coerce(cls, value: object) -> Optional["EventType"]:
        """Return the matching member or ``None`` for anything unrecognized."""

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class EventSource(str, Enum):
    LOCAL = "local"
    EXTERNAL = "external"


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


FORM_EVENT_TYPES = (EventType.WORK, EventType.PERSONAL, EventType.MEETING)
