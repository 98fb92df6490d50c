from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from ..core.dates import format_time
from ..core.event_store import EventStore
from ..domain import (
    CalendarEvent,
    EventSource,
    EventType,
    InvalidTimeRange,
    MalformedToolCall,
    ToolCallError,
    parse_iso_datetime,
)
from .tools import AddCalendarEventCall, RawToolCall, ToolInvocation, UnknownToolCall, decode_tool_call

logger = logging.getLogger(__name__)

DEFAULT_AI_DESCRIPTION = "AI Suggested"


@dataclass(frozen=True)
class RejectedToolCall:
    call: RawToolCall
    error: ToolCallError


@dataclass
class TurnOutcome:
    created: List[CalendarEvent] = field(default_factory=list)
    rejected: List[RejectedToolCall] = field(default_factory=list)
    ignored: List[RawToolCall] = field(default_factory=list)


def confirmation_line(event: CalendarEvent) -> str:
    return f"Added «{event.title}» at {format_time(event.start)}"


class ToolExecutor:
    """Validates tool invocations and turns them into event store insertions."""

    def __init__(self, store: EventStore) -> None:
        self.store = store

    def build_event(self, invocation: AddCalendarEventCall) -> CalendarEvent:
        try:
            start = parse_iso_datetime(invocation.start_iso)
            end = parse_iso_datetime(invocation.end_iso)
        except ValueError as exc:
            raise MalformedToolCall(
                f"`{invocation.name}` received an unparsable timestamp: {exc}",
                tool_name=invocation.name,
                args={"startIso": invocation.start_iso, "endIso": invocation.end_iso},
            ) from exc
        if end <= start:
            raise InvalidTimeRange(
                f"`{invocation.name}` end {invocation.end_iso} is not after start {invocation.start_iso}.",
                tool_name=invocation.name,
                args={"startIso": invocation.start_iso, "endIso": invocation.end_iso},
            )
        event_type = EventType.coerce(invocation.type) or EventType.AI_SUGGESTED
        return CalendarEvent(
            title=invocation.title,
            start=start,
            end=end,
            type=event_type,
            source=EventSource.LOCAL,
            description=invocation.description or DEFAULT_AI_DESCRIPTION,
        )

    def prepare(self, invocation: ToolInvocation) -> Optional[CalendarEvent]:
        """Validate one invocation without touching the store."""

        if isinstance(invocation, UnknownToolCall):
            logger.warning("Ignoring unrecognized tool call `%s` with args %s", invocation.name, dict(invocation.args))
            return None
        return self.build_event(invocation)

    def execute(self, invocation: ToolInvocation) -> Optional[CalendarEvent]:
        event = self.prepare(invocation)
        if event is None:
            return None
        self.store.add(event)
        logger.info("Tool `%s` added '%s' (%s)", invocation.name, event.title, event.id)
        return event

    def apply_turn(self, calls: Iterable[RawToolCall]) -> TurnOutcome:
        """Apply every call of one chat turn in order and commit them together.

        Invalid calls are discarded individually; the valid ones still land in a
        single store update, in the order the model issued them.
        """

        outcome = TurnOutcome()
        for call in calls:
            try:
                event = self.prepare(decode_tool_call(call))
            except ToolCallError as exc:
                logger.warning("Discarding tool call `%s`: %s", call.name, exc)
                outcome.rejected.append(RejectedToolCall(call=call, error=exc))
                continue
            if event is None:
                outcome.ignored.append(call)
                continue
            outcome.created.append(event)

        if outcome.created:
            self.store.add_many(outcome.created)
            logger.info("Applied %d assistant event(s) in one update", len(outcome.created))
        return outcome


def summarize_outcome(outcome: TurnOutcome) -> Tuple[str, ...]:
    return tuple(confirmation_line(event) for event in outcome.created)


__all__ = [
    "DEFAULT_AI_DESCRIPTION",
    "RejectedToolCall",
    "ToolExecutor",
    "TurnOutcome",
    "confirmation_line",
    "summarize_outcome",
]
