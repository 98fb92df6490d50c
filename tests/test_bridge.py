"""Tests for the assistant bridge.

The HTTP endpoint is replaced with an httpx.MockTransport.
"""

import json
import pytest
import httpx
from datetime import datetime

from optiplan.assistant import AssistantBridge, RawToolCall
from optiplan.assistant.bridge import CHAT_PATH
from optiplan.domain import BridgeUnavailable

BASE_URL = "http://assistant.test"
SNAPSHOT = (
    {"title": "Weekly meeting", "start": "2026-10-19T10:00:00", "end": "2026-10-19T11:00:00", "type": "work"},
)
REFERENCE = datetime(2026, 10, 19, 8, 15)


def _bridge(handler):
    return AssistantBridge(BASE_URL, transport=httpx.MockTransport(handler))


# ---------------------------------------------------------------------------
# Request building
# ---------------------------------------------------------------------------


class TestBuildRequest:
    def test_shape(self):
        bridge = AssistantBridge(BASE_URL)
        body = bridge.build_request(
            "Plan my evening",
            SNAPSHOT,
            REFERENCE,
            [{"role": "user", "text": "hi"}, {"role": "assistant", "text": "hello"}],
        )
        assert body == {
            "message": "Plan my evening",
            "history": [{"role": "user", "text": "hi"}, {"role": "assistant", "text": "hello"}],
            "currentEvents": list(SNAPSHOT),
            "currentDate": "2026-10-19T08:15:00",
        }


# ---------------------------------------------------------------------------
# ask()
# ---------------------------------------------------------------------------


class TestAsk:
    @pytest.mark.asyncio
    async def test_posts_and_parses_reply(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "text": "Sure, booked it. ",
                    "functionCalls": [
                        {"name": "add_calendar_event", "args": {"title": "A"}},
                        {"name": "add_calendar_event", "args": {"title": "B"}},
                    ],
                },
            )

        reply = await _bridge(handler).ask("  Book A and B  ", SNAPSHOT, REFERENCE)

        assert seen["url"] == f"{BASE_URL}{CHAT_PATH}"
        assert seen["body"]["message"] == "Book A and B"
        assert seen["body"]["currentEvents"] == list(SNAPSHOT)
        assert reply.reply_text == "Sure, booked it."
        assert reply.tool_calls == (
            RawToolCall("add_calendar_event", {"title": "A"}),
            RawToolCall("add_calendar_event", {"title": "B"}),
        )

    @pytest.mark.asyncio
    async def test_empty_reply_is_valid(self):
        reply = await _bridge(lambda request: httpx.Response(200, json={})).ask("hi", (), REFERENCE)
        assert reply.is_empty

    @pytest.mark.asyncio
    async def test_null_args_become_empty_mapping(self):
        handler = lambda request: httpx.Response(200, json={"functionCalls": [{"name": "x", "args": None}]})
        reply = await _bridge(handler).ask("hi", (), REFERENCE)
        assert reply.tool_calls == (RawToolCall("x", {}),)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("utterance", ["", "   "])
    async def test_blank_utterance_rejected(self, utterance):
        def handler(request):  # pragma: no cover - must not be called
            raise AssertionError("bridge should not send")

        with pytest.raises(ValueError):
            await _bridge(handler).ask(utterance, (), REFERENCE)

    @pytest.mark.asyncio
    async def test_server_error_carries_detail(self):
        handler = lambda request: httpx.Response(500, json={"error": "API key not configured on server"})
        with pytest.raises(BridgeUnavailable) as excinfo:
            await _bridge(handler).ask("hi", (), REFERENCE)
        assert excinfo.value.status_code == 500
        assert "API key not configured on server" in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(BridgeUnavailable):
            await _bridge(handler).ask("hi", (), REFERENCE)

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        handler = lambda request: httpx.Response(200, text="<html>oops</html>")
        with pytest.raises(BridgeUnavailable):
            await _bridge(handler).ask("hi", (), REFERENCE)

    @pytest.mark.asyncio
    async def test_wrong_shape_body(self):
        handler = lambda request: httpx.Response(200, json={"functionCalls": "not-a-list"})
        with pytest.raises(BridgeUnavailable):
            await _bridge(handler).ask("hi", (), REFERENCE)
