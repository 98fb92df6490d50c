from __future__ import annotations

import logging
from datetime import date, datetime
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Union

from ..assistant import AssistantBridge, ChatSession
from ..core.dates import add_days, add_months
from ..core.event_store import EventStore
from ..core.operations import OperationTracker
from ..core.seed import generate_seed_events
from ..domain import CalendarEvent, SyncFailed
from ..integrations import AdapterSession, fetch_external_events
from .forms import AddEventForm
from .views import DayView, MonthView, build_day_view, build_month_view

logger = logging.getLogger(__name__)

SYNC_FAILED_MESSAGE = "Calendar sync failed. Please try again."
CONNECT_PROMPT_TITLE = "Connect external calendar"
CONNECT_PROMPT_TEXT = (
    "Import the events from your external calendar into OptiPlan so the assistant can plan around them.\n\n"
    "Existing events are shown read-only and your data stays on this device. "
    "By continuing you agree to the terms of use and the privacy policy."
)

ExternalFetcher = Callable[[AdapterSession], Awaitable[List[CalendarEvent]]]


class ViewMode(str, Enum):
    MONTH = "month"
    DAY = "day"


class CalendarController:
    """State behind the calendar screen: the store, navigation and operation flags.

    Widgets call into the controller and re-render from :meth:`render`; nothing
    here depends on a GUI toolkit.
    """

    def __init__(
        self,
        *,
        store: Optional[EventStore] = None,
        bridge: AssistantBridge,
        adapter_session: AdapterSession,
        fetcher: ExternalFetcher = fetch_external_events,
        clock: Callable[[], datetime] = datetime.now,
        locale: str = "ja-JP",
        seed: bool = False,
    ) -> None:
        self.clock = clock
        self.locale = locale
        self.store = store if store is not None else EventStore()
        if seed:
            self.store.add_many(generate_seed_events(clock().date()))
        self.adapter_session = adapter_session
        self._fetcher = fetcher
        self.chat = ChatSession(store=self.store, bridge=bridge, clock=clock)
        self.sync_tracker = OperationTracker("sync")
        self.view_mode = ViewMode.DAY
        self.current_date: date = clock().date()
        self.connected = False
        self.last_alert: Optional[str] = None

    # ------------------------------------------------------------------ navigation

    def set_view_mode(self, mode: Union[ViewMode, str]) -> None:
        self.view_mode = ViewMode(mode)

    def go_previous(self) -> date:
        return self._shift(-1)

    def go_next(self) -> date:
        return self._shift(1)

    def go_today(self) -> date:
        self.current_date = self.clock().date()
        return self.current_date

    def select_date(self, day: date) -> None:
        """Picking a day in the month grid opens it in day view."""

        self.current_date = day
        self.view_mode = ViewMode.DAY

    def _shift(self, step: int) -> date:
        if self.view_mode == ViewMode.MONTH:
            self.current_date = add_months(self.current_date, step)
        else:
            self.current_date = add_days(self.current_date, step)
        return self.current_date

    # ------------------------------------------------------------------ actions

    def new_form(self) -> AddEventForm:
        return AddEventForm.for_day(self.current_date)

    def submit_form(self, form: AddEventForm) -> CalendarEvent:
        event = form.validate()
        self.store.add(event)
        logger.info("Added local event '%s' on %s", event.title, event.start.date())
        return event

    @property
    def syncing(self) -> bool:
        return self.sync_tracker.busy

    @property
    def needs_connect_prompt(self) -> bool:
        """The first sync asks for consent; once connected, sync runs directly."""

        return not self.connected

    def start_sync(self) -> int:
        """Mark a sync in flight from the caller's thread; raises ``OperationBusy``."""

        stamp = self.sync_tracker.begin()
        self.last_alert = None
        return stamp

    async def sync(self, stamp: Optional[int] = None) -> bool:
        """Replace external events with a fresh batch; returns ``True`` when applied.

        Pass the stamp from :meth:`start_sync` when the busy flag has to be
        visible before the fetch is scheduled.
        """

        if stamp is None:
            stamp = self.start_sync()
        try:
            batch = await self._fetcher(self.adapter_session)
        except SyncFailed as exc:
            if self.sync_tracker.fail(stamp, str(exc)):
                self.last_alert = SYNC_FAILED_MESSAGE
            return False
        except Exception as exc:
            self.sync_tracker.fail(stamp, str(exc))
            raise

        if not self.sync_tracker.is_current(stamp):
            self.sync_tracker.succeed(stamp)
            return False
        try:
            self.store.replace_external(batch)
        except Exception as exc:
            self.sync_tracker.fail(stamp, str(exc))
            raise
        self.sync_tracker.succeed(stamp)
        self.connected = True
        logger.info("External sync applied %d event(s)", len(batch))
        return True

    def dismiss_alert(self) -> None:
        self.last_alert = None

    def subscribe(self, listener: Callable[[int], None]) -> Callable[[], None]:
        """Observe store commits; the listener receives the new store version."""

        return self.store.subscribe(listener)

    # ------------------------------------------------------------------ rendering

    def render(self) -> Union[MonthView, DayView]:
        if self.view_mode == ViewMode.MONTH:
            return build_month_view(
                self.store,
                self.current_date.year,
                self.current_date.month,
                today=self.clock().date(),
                locale=self.locale,
            )
        return build_day_view(self.store, self.current_date, now=self.clock(), locale=self.locale)


__all__ = ["CONNECT_PROMPT_TEXT", "CONNECT_PROMPT_TITLE", "CalendarController", "SYNC_FAILED_MESSAGE", "ViewMode"]
