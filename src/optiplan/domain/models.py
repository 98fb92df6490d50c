from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from .enums import ChatRole, EventSource, EventType
from .errors import EventDataError, InvalidTimeRange


def new_id() -> str:
    return uuid4().hex


def parse_iso_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp into a naive local datetime.

    Offset-aware inputs (including a trailing ``Z``) are converted to the local
    timezone before the offset is dropped, so every datetime in the store shares
    the same naive local semantics.
    """

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        raise ValueError(f"Unsupported datetime value: {value!r}")
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone().replace(tzinfo=None)
        except OverflowError as exc:
            raise ValueError(f"Timestamp out of range: {value!r}") from exc
    return parsed


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    title: str
    start: datetime
    end: datetime
    type: EventType = EventType.WORK
    source: EventSource = EventSource.LOCAL
    description: Optional[str] = None
    location: Optional[str] = None
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise EventDataError("Event title must be a non-empty string.")
        if self.end <= self.start:
            raise InvalidTimeRange(
                f"Event '{self.title}' ends at {self.end.isoformat()} which is not after {self.start.isoformat()}."
            )
        object.__setattr__(self, "type", EventType(self.type))
        object.__setattr__(self, "source", EventSource(self.source))

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def to_schedule_entry(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "type": self.type.value,
        }


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: ChatRole
    text: str
    id: str = field(default_factory=new_id)

    def to_history_item(self) -> Dict[str, str]:
        return {"role": ChatRole(self.role).value, "text": self.text}
