"""Tests for the server-side model gateway.

The OpenAI client is replaced with a MagicMock shaped like a chat completion.
"""

import json
import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock

from optiplan.api import ChatRequestPayload
from optiplan.config import LlmSettings
from optiplan.services import ChatModelGateway, ModelCallFailed, ModelNotConfigured

SETTINGS = LlmSettings(
    api_key="sk-test",
    model="gpt-4o-mini",
    base_url=None,
    organization=None,
    project=None,
    temperature=0.7,
)

REQUEST = ChatRequestPayload.model_validate(
    {
        "message": "Fit in an hour of study today",
        "history": [{"role": "user", "text": "hi"}, {"role": "model", "text": "hello"}],
        "currentEvents": [
            {"title": "Weekly meeting", "start": "2026-10-19T10:00:00", "end": "2026-10-19T11:00:00", "type": "work"}
        ],
        "currentDate": "2026-10-19T08:15:00",
    }
)


def _tool_call(name, arguments):
    return SimpleNamespace(function=SimpleNamespace(name=name, arguments=arguments))


def _client(content=None, tool_calls=None, error=None):
    client = MagicMock()
    if error is not None:
        client.chat.completions.create.side_effect = error
    else:
        message = SimpleNamespace(content=content, tool_calls=tool_calls)
        client.chat.completions.create.return_value = SimpleNamespace(choices=[SimpleNamespace(message=message)])
    return client


class TestComplete:
    def test_request_shape(self):
        client = _client(content="Sure.")
        ChatModelGateway(SETTINGS, client=client).complete(REQUEST)

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.7
        assert kwargs["tool_choice"] == "auto"
        assert [tool["function"]["name"] for tool in kwargs["tools"]] == ["add_calendar_event"]

        messages = kwargs["messages"]
        assert [message["role"] for message in messages] == ["system", "user", "assistant", "user"]
        assert "OptiPlan" in messages[0]["content"]
        assert "2026-10-19T08:15:00" in messages[0]["content"]
        assert "Weekly meeting" in messages[0]["content"]
        assert messages[-1]["content"] == "Fit in an hour of study today"

    def test_tool_calls_in_order(self):
        client = _client(
            content=None,
            tool_calls=[
                _tool_call("add_calendar_event", json.dumps({"title": "A"})),
                _tool_call("add_calendar_event", json.dumps({"title": "B"})),
            ],
        )
        result = ChatModelGateway(SETTINGS, client=client).complete(REQUEST)
        assert result.text == ""
        assert [call.args["title"] for call in result.function_calls] == ["A", "B"]

    def test_undecodable_arguments_become_empty(self):
        client = _client(tool_calls=[_tool_call("add_calendar_event", "{not json")])
        result = ChatModelGateway(SETTINGS, client=client).complete(REQUEST)
        assert result.function_calls[0].args == {}

    def test_provider_failure(self):
        client = _client(error=RuntimeError("rate limited"))
        with pytest.raises(ModelCallFailed, match="rate limited"):
            ChatModelGateway(SETTINGS, client=client).complete(REQUEST)

    def test_missing_key(self):
        settings = LlmSettings(api_key=None, model="gpt-4o-mini", base_url=None, organization=None, project=None, temperature=0.7)
        with pytest.raises(ModelNotConfigured, match="API key not configured on server"):
            ChatModelGateway(settings).complete(REQUEST)
