"""External calendar provider integration."""

from __future__ import annotations

from .google_calendar import AdapterSession, fetch_external_events, simulated_events
from .provider_config import ProviderConfig, fetch_provider_config

__all__ = [
    "AdapterSession",
    "ProviderConfig",
    "fetch_external_events",
    "fetch_provider_config",
    "simulated_events",
]
