"""
External calendar adapter backed by Google Calendar.

With provider credentials configured, events are listed through the Calendar v3
API after an OAuth handshake (stored token, refresh, then consent flow). Without
them the adapter waits a fixed simulated latency and returns a fixed demo batch.
Both paths return the same type, so callers cannot tell them apart.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from ..config import GOOGLE_CALENDAR_SCOPES, ProviderSettings
from ..domain import CalendarEvent, EventDataError, EventSource, EventType, SyncFailed, new_id, parse_iso_datetime
from .provider_config import ProviderConfig

logger = logging.getLogger(__name__)

PAGE_SIZE = 100
DEFAULT_SIMULATED_LATENCY = 1.5
SYNC_NOTE = "Synced from your external calendar"


@dataclass(frozen=True)
class AdapterSession:
    """Provider configuration resolved once at startup and read by every sync."""

    client_id: str = ""
    client_secret: str = ""
    api_key: str = ""
    scopes: Tuple[str, ...] = GOOGLE_CALENDAR_SCOPES
    token_path: Optional[Path] = None
    simulated_latency: float = DEFAULT_SIMULATED_LATENCY

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.scopes)

    @classmethod
    def from_settings(cls, settings: ProviderSettings, remote: Optional[ProviderConfig] = None) -> "AdapterSession":
        client_id = settings.client_id
        api_key = settings.api_key
        if remote and not remote.is_empty:
            client_id = remote.provider_client_id
            api_key = remote.provider_api_key or api_key
        session = cls(
            client_id=client_id,
            client_secret=settings.client_secret,
            api_key=api_key,
            token_path=settings.token_path,
            simulated_latency=settings.simulated_latency,
        )
        if not session.is_configured:
            logger.warning("No calendar provider client id configured; external sync runs in demo mode")
        return session

    def client_config(self) -> Dict[str, Any]:
        return {
            "installed": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
                "redirect_uris": ["http://localhost"],
            }
        }


# ---------------------------------------------------------------------------
# Real provider path
# ---------------------------------------------------------------------------


def authorize(session: AdapterSession) -> Credentials:
    """Return valid credentials, reusing and refreshing the cached token first."""

    scopes = list(session.scopes)
    creds: Optional[Credentials] = None
    token_path = session.token_path

    if token_path and token_path.exists():
        creds = Credentials.from_authorized_user_file(str(token_path), scopes)
        logger.debug("Loaded cached provider token from %s", token_path)

    if creds and creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
            logger.info("Provider token refreshed")
        except Exception as exc:  # noqa: BLE001
            logger.warning("Token refresh failed (%s), requesting consent again", exc)
            creds = None

    if not creds or not creds.valid:
        flow = InstalledAppFlow.from_client_config(session.client_config(), scopes)
        creds = flow.run_local_server(port=0)
        logger.info("Provider credentials obtained via consent flow")

    if token_path:
        token_path.parent.mkdir(parents=True, exist_ok=True)
        token_path.write_text(creds.to_json(), encoding="utf-8")
    return creds


def build_calendar_service(session: AdapterSession) -> Any:
    creds = authorize(session)
    return build(
        "calendar",
        "v3",
        credentials=creds,
        developerKey=session.api_key or None,
        cache_discovery=False,
    )


def list_remote_items(session: AdapterSession, now: datetime) -> List[Dict[str, Any]]:
    service = build_calendar_service(session)
    response = (
        service.events()
        .list(
            calendarId="primary",
            timeMin=now.astimezone(timezone.utc).isoformat(),
            showDeleted=False,
            singleEvents=True,
            maxResults=PAGE_SIZE,
            orderBy="startTime",
        )
        .execute()
    )
    return list(response.get("items", []))


def _remote_timestamp(boundary: Dict[str, Any]) -> datetime:
    return parse_iso_datetime(boundary.get("dateTime") or boundary["date"])


def map_remote_item(item: Dict[str, Any]) -> Optional[CalendarEvent]:
    try:
        return CalendarEvent(
            id=str(item.get("id") or new_id()),
            title=item.get("summary") or "No Title",
            start=_remote_timestamp(item.get("start") or {}),
            end=_remote_timestamp(item.get("end") or {}),
            type=EventType.EXTERNAL,
            source=EventSource.EXTERNAL,
            description=item.get("description"),
            location=item.get("location"),
        )
    except (KeyError, ValueError, EventDataError) as exc:
        logger.warning("Skipping remote calendar item %s: %s", item.get("id"), exc)
        return None


# ---------------------------------------------------------------------------
# Simulated path
# ---------------------------------------------------------------------------


def simulated_events(today: Optional[date] = None) -> List[CalendarEvent]:
    anchor = today or date.today()

    def at(offset: int, hour: int, minute: int = 0) -> datetime:
        return datetime.combine(anchor + timedelta(days=offset), time(hour, minute))

    return [
        CalendarEvent(
            title="External: Team sync",
            start=at(0, 9, 30),
            end=at(0, 10, 30),
            type=EventType.EXTERNAL,
            source=EventSource.EXTERNAL,
            description=SYNC_NOTE,
        ),
        CalendarEvent(
            title="External: Dentist check-up",
            start=at(1, 15),
            end=at(1, 16),
            type=EventType.EXTERNAL,
            source=EventSource.EXTERNAL,
        ),
        CalendarEvent(
            title="External: Flight",
            start=at(3, 10),
            end=at(3, 13),
            type=EventType.EXTERNAL,
            source=EventSource.EXTERNAL,
        ),
    ]


async def fetch_external_events(session: AdapterSession, *, now: Optional[datetime] = None) -> List[CalendarEvent]:
    """Return the external calendar batch; raises :class:`SyncFailed` on real-path errors."""

    reference = now or datetime.now()
    if not session.is_configured:
        await asyncio.sleep(session.simulated_latency)
        return simulated_events(reference.date())

    try:
        items = await asyncio.to_thread(list_remote_items, session, reference)
    except Exception as exc:  # noqa: BLE001
        logger.error("External calendar sync failed: %s", exc)
        raise SyncFailed(f"External calendar sync failed: {exc}") from exc

    events = [event for event in (map_remote_item(item) for item in items) if event is not None]
    logger.info("Fetched %d external event(s) (%d skipped)", len(events), len(items) - len(events))
    return events


__all__ = [
    "AdapterSession",
    "PAGE_SIZE",
    "authorize",
    "build_calendar_service",
    "fetch_external_events",
    "list_remote_items",
    "map_remote_item",
    "simulated_events",
]
