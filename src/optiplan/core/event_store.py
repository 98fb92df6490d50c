from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from ..domain import CalendarEvent, DuplicateEventError, EventDataError, EventSource

logger = logging.getLogger(__name__)

StoreListener = Callable[[int], None]


class EventStore:
    """In-memory, insertion-ordered collection of calendar events keyed by id.

    Every public mutation builds the next state off to the side and swaps it in
    with a single assignment, so listeners only ever observe complete updates.
    """

    def __init__(self, events: Optional[Iterable[CalendarEvent]] = None) -> None:
        self._events_by_id: Dict[str, CalendarEvent] = {}
        self._listeners: List[StoreListener] = []
        self.version = 0
        if events:
            self.add_many(events)

    # ------------------------------------------------------------------ reads

    def __len__(self) -> int:
        return len(self._events_by_id)

    def __iter__(self) -> Iterator[CalendarEvent]:
        return iter(tuple(self._events_by_id.values()))

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._events_by_id

    def get(self, event_id: str) -> Optional[CalendarEvent]:
        return self._events_by_id.get(event_id)

    def events(self) -> Tuple[CalendarEvent, ...]:
        return tuple(self._events_by_id.values())

    def count(self, source: Optional[EventSource] = None) -> int:
        if source is None:
            return len(self._events_by_id)
        return sum(1 for event in self._events_by_id.values() if event.source == source)

    def events_for_day(self, target_day: date) -> List[CalendarEvent]:
        return [event for event in self._events_by_id.values() if event.start.date() == target_day]

    def events_in_month(self, year: int, month: int) -> List[CalendarEvent]:
        return [
            event
            for event in self._events_by_id.values()
            if event.start.year == year and event.start.month == month
        ]

    def snapshot(self) -> Tuple[Dict[str, str], ...]:
        """Read-only projection handed to the assistant as schedule context."""

        return tuple(event.to_schedule_entry() for event in self._events_by_id.values())

    # ------------------------------------------------------------------ writes

    def add(self, event: CalendarEvent) -> CalendarEvent:
        self.add_many([event])
        return event

    def add_many(self, events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
        batch = list(events)
        if not batch:
            return []
        staged = dict(self._events_by_id)
        for event in batch:
            if event.id in staged:
                raise DuplicateEventError(event.id)
            staged[event.id] = event
        self._commit(staged, reason=f"added {len(batch)} event(s)")
        return batch

    def replace_external(self, events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
        """Drop every external event and insert ``events`` in one step."""

        batch = list(events)
        for event in batch:
            if event.source != EventSource.EXTERNAL:
                raise EventDataError(f"Event '{event.id}' is not tagged as external and cannot replace a sync batch.")
        staged = {
            event_id: event
            for event_id, event in self._events_by_id.items()
            if event.source != EventSource.EXTERNAL
        }
        for event in batch:
            if event.id in staged:
                raise DuplicateEventError(event.id)
            staged[event.id] = event
        removed = self.count(EventSource.EXTERNAL)
        self._commit(staged, reason=f"replaced {removed} external event(s) with {len(batch)}")
        return batch

    # ------------------------------------------------------------------ observers

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, staged: Dict[str, CalendarEvent], *, reason: str) -> None:
        self._events_by_id = staged
        self.version += 1
        logger.debug("Event store v%d: %s", self.version, reason)
        for listener in list(self._listeners):
            listener(self.version)


__all__ = ["EventStore", "StoreListener"]
