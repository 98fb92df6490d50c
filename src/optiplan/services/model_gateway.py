from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

import orjson
from openai import OpenAI

from ..api.models import ChatRequestPayload, ChatResponsePayload, FunctionCallPayload, HistoryItemPayload, ScheduleEntryPayload
from ..assistant.tools import get_tool_specs
from ..config import LlmSettings, get_settings
from ..domain import OptiPlanError
from .prompts import SYSTEM_PROMPT_TEMPLATE

logger = logging.getLogger(__name__)


class ModelNotConfigured(OptiPlanError):
    """The server has no model API key."""


class ModelCallFailed(OptiPlanError):
    """The model provider rejected or failed the completion request."""


class ChatModelGateway:
    """Server-side half of the assistant: one completion per chat turn."""

    def __init__(self, settings: Optional[LlmSettings] = None, *, client: Optional[OpenAI] = None) -> None:
        self.settings = settings or get_settings().llm
        self._client = client
        self._tools = [spec.as_tool() for spec in get_tool_specs()]

    # ------------------------------------------------------------------ public API

    def complete(self, request: ChatRequestPayload) -> ChatResponsePayload:
        client = self._ensure_client()
        messages = [
            {"role": "system", "content": self.compose_system_prompt(request.current_date, request.current_events)},
            *self._history_messages(request.history),
            {"role": "user", "content": request.message},
        ]
        try:
            completion = client.chat.completions.create(
                model=self.settings.model,
                temperature=self.settings.temperature,
                messages=messages,
                tools=self._tools,
                tool_choice="auto",
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Model completion failed")
            raise ModelCallFailed(str(exc)) from exc

        message = completion.choices[0].message
        calls = [
            FunctionCallPayload(name=call.function.name, args=self._safe_json(call.function.arguments))
            for call in (message.tool_calls or [])
        ]
        text = (message.content or "").strip()
        logger.info("Model answered with %d tool call(s)", len(calls))
        return ChatResponsePayload(text=text, function_calls=calls)

    def compose_system_prompt(self, current_date: str, schedule: Iterable[ScheduleEntryPayload]) -> str:
        entries = [entry.model_dump() for entry in schedule]
        return SYSTEM_PROMPT_TEMPLATE.format(
            current_date=current_date,
            schedule=orjson.dumps(entries).decode("utf-8"),
        )

    # ------------------------------------------------------------------ helpers

    def _ensure_client(self) -> OpenAI:
        if self._client is not None:
            return self._client
        if not self.settings.is_configured:
            missing = ", ".join(self.settings.missing_env_vars)
            logger.error("Model client not configured. Missing: %s", missing)
            raise ModelNotConfigured("API key not configured on server")
        self._client = OpenAI(
            api_key=self.settings.api_key,
            base_url=self.settings.base_url,
            organization=self.settings.organization,
            project=self.settings.project,
        )
        return self._client

    def _history_messages(self, history: Iterable[HistoryItemPayload]) -> List[Dict[str, str]]:
        messages = []
        for item in history:
            role = "user" if item.role == "user" else "assistant"
            messages.append({"role": role, "content": item.text})
        return messages

    def _safe_json(self, raw: Any) -> Dict[str, Any]:
        if not raw:
            return {}
        if isinstance(raw, dict):
            return raw
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Dropping undecodable tool arguments: %r", raw)
            return {}
        return parsed if isinstance(parsed, dict) else {}


__all__ = ["ChatModelGateway", "ModelCallFailed", "ModelNotConfigured"]
