"""Tests for the chat session driving one assistant turn at a time."""

import asyncio
import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from optiplan.assistant import BridgeReply, ChatSession, RawToolCall
from optiplan.assistant.session import ACKNOWLEDGEMENT, APOLOGY_MESSAGE, WELCOME_MESSAGE
from optiplan.domain import BridgeUnavailable, ChatRole, EventSource, OperationBusy

NOW = datetime(2026, 10, 19, 8, 15)


def _session(store, reply=None, side_effect=None):
    bridge = MagicMock()
    bridge.ask = AsyncMock(return_value=reply or BridgeReply(), side_effect=side_effect)
    return ChatSession(store=store, bridge=bridge, clock=lambda: NOW), bridge


def _call(title, start, end):
    return RawToolCall("add_calendar_event", {"title": title, "startIso": start, "endIso": end})


class TestTranscript:
    def test_starts_with_welcome(self, store):
        session, _ = _session(store)
        assert [message.text for message in session.messages] == [WELCOME_MESSAGE]
        assert session.history() == []

    @pytest.mark.asyncio
    async def test_blank_input_is_ignored(self, store):
        session, bridge = _session(store)
        assert await session.send("   ") is None
        bridge.ask.assert_not_called()
        assert len(session.messages) == 1


class TestSend:
    @pytest.mark.asyncio
    async def test_passes_snapshot_reference_and_history(self, store, make_event):
        store.add(make_event("Weekly meeting", start=(10, 0), end=(11, 0)))
        session, bridge = _session(store, BridgeReply(reply_text="You are free after 11."))

        await session.send("When am I free?")
        await session.send("And tomorrow?")

        first, second = bridge.ask.await_args_list
        text, snapshot, reference, history = first.args
        assert text == "When am I free?"
        assert snapshot == store.snapshot()
        assert reference == NOW
        assert history == []
        assert second.args[3] == [
            {"role": "user", "text": "When am I free?"},
            {"role": "assistant", "text": "You are free after 11."},
        ]

    @pytest.mark.asyncio
    async def test_tool_calls_applied_and_confirmed(self, store):
        reply = BridgeReply(
            reply_text="Booked both.",
            tool_calls=(
                _call("Study", "2026-10-19T19:00:00", "2026-10-19T20:00:00"),
                _call("Walk", "2026-10-19T20:30:00", "2026-10-19T21:00:00"),
            ),
        )
        session, _ = _session(store, reply)

        message = await session.send("Plan my evening")

        assert [event.title for event in store] == ["Study", "Walk"]
        assert all(event.source == EventSource.LOCAL for event in store)
        assert message.role == ChatRole.ASSISTANT
        assert message.text == "Booked both.\n\n✨ Added «Study» at 19:00\n\n✨ Added «Walk» at 20:30"

    @pytest.mark.asyncio
    async def test_empty_reply_is_acknowledged(self, store):
        session, _ = _session(store, BridgeReply())
        message = await session.send("ok")
        assert message.text == ACKNOWLEDGEMENT

    @pytest.mark.asyncio
    async def test_rejected_call_still_shows_reply(self, store):
        reply = BridgeReply(
            reply_text="Here you go.",
            tool_calls=(_call("Backwards", "2026-10-19T10:00:00", "2026-10-19T09:00:00"),),
        )
        session, _ = _session(store, reply)
        message = await session.send("add it")
        assert message.text == "Here you go."
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_bridge_failure_appends_apology(self, store):
        session, _ = _session(store, side_effect=BridgeUnavailable("down", status_code=500))
        message = await session.send("hello")
        assert message.text == APOLOGY_MESSAGE
        assert len(store) == 0
        assert session.tracker.state.value == "failed"
        assert not session.busy


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_second_send_while_in_flight_is_rejected(self, store):
        gate = asyncio.Event()

        async def slow_ask(*args):
            await gate.wait()
            return BridgeReply(reply_text="done")

        session, bridge = _session(store)
        bridge.ask = AsyncMock(side_effect=slow_ask)

        first = asyncio.create_task(session.send("first"))
        await asyncio.sleep(0)
        assert session.busy
        with pytest.raises(OperationBusy):
            await session.send("second")
        gate.set()
        assert (await first).text == "done"

    @pytest.mark.asyncio
    async def test_cancelled_turn_is_discarded(self, store):
        gate = asyncio.Event()

        async def slow_ask(*args):
            await gate.wait()
            return BridgeReply(
                reply_text="late",
                tool_calls=(_call("Late", "2026-10-19T19:00:00", "2026-10-19T20:00:00"),),
            )

        session, bridge = _session(store)
        bridge.ask = AsyncMock(side_effect=slow_ask)

        task = asyncio.create_task(session.send("slow"))
        await asyncio.sleep(0)
        session.cancel()
        gate.set()

        assert await task is None
        assert len(store) == 0
        assert [message.text for message in session.messages][-1] == "slow"

    @pytest.mark.asyncio
    async def test_started_turn_is_busy_before_it_runs(self, store):
        session, bridge = _session(store, BridgeReply(reply_text="ok"))

        turn = session.start_turn("  plan my evening ")
        assert session.busy
        assert turn.text == "plan my evening"
        assert session.messages[-1].text == "plan my evening"
        bridge.ask.assert_not_called()
        with pytest.raises(OperationBusy):
            session.start_turn("again")

        reply = await session.complete_turn(turn)
        assert reply.text == "ok"
        assert not session.busy
        assert bridge.ask.await_args.args[3] == []

    def test_blank_turn_does_not_start(self, store):
        session, _ = _session(store)
        assert session.start_turn("   ") is None
        assert not session.busy
