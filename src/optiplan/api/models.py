"""Wire payloads shared by the chat server and the assistant bridge."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HistoryItemPayload(BaseModel):
    role: str
    text: str = Field(default="")


class ScheduleEntryPayload(BaseModel):
    title: str
    start: str
    end: str
    type: str


class ChatRequestPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(min_length=1)
    history: List[HistoryItemPayload] = Field(default_factory=list)
    current_events: List[ScheduleEntryPayload] = Field(default_factory=list, alias="currentEvents")
    current_date: str = Field(alias="currentDate")


class FunctionCallPayload(BaseModel):
    name: str
    args: Optional[Dict[str, Any]] = Field(default=None)


class ChatResponsePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = Field(default=None)
    function_calls: Optional[List[FunctionCallPayload]] = Field(default=None, alias="functionCalls")


class ErrorPayload(BaseModel):
    error: str


class ProviderConfigPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider_client_id: str = Field(default="", alias="providerClientId")
    provider_api_key: str = Field(default="", alias="providerApiKey")
