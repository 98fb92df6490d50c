"""HTTP payload models for the chat and config endpoints."""

from __future__ import annotations

from .models import (
    ChatRequestPayload,
    ChatResponsePayload,
    ErrorPayload,
    FunctionCallPayload,
    HistoryItemPayload,
    ProviderConfigPayload,
    ScheduleEntryPayload,
)

__all__ = [
    "ChatRequestPayload",
    "ChatResponsePayload",
    "ErrorPayload",
    "FunctionCallPayload",
    "HistoryItemPayload",
    "ProviderConfigPayload",
    "ScheduleEntryPayload",
]
