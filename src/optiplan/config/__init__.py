"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    APP_NAME,
    DATA_DIR,
    GOOGLE_CALENDAR_SCOPES,
    LOG_DIR,
    ApiSettings,
    AppSettings,
    LlmSettings,
    ProviderSettings,
    UiSettings,
    get_settings,
)
from .theme import AppPalette

__all__ = [
    "APP_NAME",
    "DATA_DIR",
    "GOOGLE_CALENDAR_SCOPES",
    "LOG_DIR",
    "ApiSettings",
    "AppPalette",
    "AppSettings",
    "LlmSettings",
    "ProviderSettings",
    "UiSettings",
    "get_settings",
]
