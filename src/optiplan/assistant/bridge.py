from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple

import httpx
from pydantic import ValidationError

from ..api.models import ChatResponsePayload
from ..domain import BridgeUnavailable
from .tools import RawToolCall

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"


@dataclass(frozen=True)
class BridgeReply:
    reply_text: str = ""
    tool_calls: Tuple[RawToolCall, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.reply_text and not self.tool_calls


class AssistantBridge:
    """Sends one chat turn to the ``/api/chat`` endpoint and decodes the answer.

    The bridge never touches the event store; it only returns the reply text and
    the tool calls the model asked for, in the order the model emitted them.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def build_request(
        self,
        utterance: str,
        schedule_snapshot: Iterable[Mapping[str, Any]],
        reference_date: datetime,
        history: Iterable[Mapping[str, str]] = (),
    ) -> Dict[str, Any]:
        return {
            "message": utterance,
            "history": [{"role": item["role"], "text": item["text"]} for item in history],
            "currentEvents": [
                {"title": entry["title"], "start": entry["start"], "end": entry["end"], "type": entry["type"]}
                for entry in schedule_snapshot
            ],
            "currentDate": reference_date.isoformat(),
        }

    async def ask(
        self,
        utterance: str,
        schedule_snapshot: Sequence[Mapping[str, Any]],
        reference_date: datetime,
        history: Sequence[Mapping[str, str]] = (),
    ) -> BridgeReply:
        if not utterance or not utterance.strip():
            raise ValueError("The assistant bridge must not be invoked with an empty utterance.")

        body = self.build_request(utterance.strip(), schedule_snapshot, reference_date, history)
        url = f"{self.base_url}{CHAT_PATH}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=body)
        except httpx.HTTPError as exc:
            logger.warning("Assistant endpoint unreachable at %s: %s", url, exc)
            raise BridgeUnavailable(f"Assistant endpoint unreachable: {exc}") from exc

        if not response.is_success:
            detail = self._error_detail(response)
            logger.warning("Assistant endpoint answered %s: %s", response.status_code, detail)
            raise BridgeUnavailable(f"Assistant endpoint error: {detail}", status_code=response.status_code)

        reply = self.parse_response(response)
        logger.info("Assistant replied with %d character(s) and %d tool call(s)", len(reply.reply_text), len(reply.tool_calls))
        return reply

    def parse_response(self, response: httpx.Response) -> BridgeReply:
        try:
            payload = ChatResponsePayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Assistant endpoint returned a malformed body: %s", exc)
            raise BridgeUnavailable("Assistant endpoint returned a malformed body.", status_code=response.status_code) from exc
        calls = tuple(RawToolCall(name=call.name, args=dict(call.args or {})) for call in payload.function_calls or [])
        return BridgeReply(reply_text=(payload.text or "").strip(), tool_calls=calls)

    def _error_detail(self, response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return f"HTTP {response.status_code}"


__all__ = ["AssistantBridge", "BridgeReply", "CHAT_PATH"]
