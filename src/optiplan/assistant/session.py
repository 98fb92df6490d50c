from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from ..core.event_store import EventStore
from ..core.operations import OperationTracker
from ..domain import BridgeUnavailable, ChatMessage, ChatRole
from .bridge import AssistantBridge
from .executor import ToolExecutor, TurnOutcome, summarize_outcome

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Hi! I'm OptiPlan, your scheduling assistant. I can help you rearrange your plans and make the most "
    "of your free time. Try asking \"When could I fit in an hour of study today?\""
)
APOLOGY_MESSAGE = "Sorry, something went wrong. Please try again."
ACKNOWLEDGEMENT = "Understood."


@dataclass(frozen=True)
class PendingTurn:
    stamp: int
    text: str
    history: List[dict]


class ChatSession:
    """Owns the transcript and drives one assistant turn at a time."""

    def __init__(
        self,
        *,
        store: EventStore,
        bridge: AssistantBridge,
        executor: Optional[ToolExecutor] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.bridge = bridge
        self.executor = executor or ToolExecutor(store)
        self.clock = clock
        self.tracker = OperationTracker("chat")
        self._messages: List[ChatMessage] = [ChatMessage(role=ChatRole.ASSISTANT, text=WELCOME_MESSAGE, id="welcome")]

    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def busy(self) -> bool:
        return self.tracker.busy

    def history(self) -> List[dict]:
        return [message.to_history_item() for message in self._messages if message.id != "welcome"]

    def _append(self, role: ChatRole, text: str) -> ChatMessage:
        message = ChatMessage(role=role, text=text)
        self._messages.append(message)
        return message

    async def send(self, utterance: str, *, reference_date: Optional[datetime] = None) -> Optional[ChatMessage]:
        """Run one turn and return the assistant message appended for it.

        Blank input is ignored and returns ``None``; so does a turn whose result
        arrives after :meth:`cancel` superseded it.
        """

        turn = self.start_turn(utterance)
        if turn is None:
            return None
        return await self.complete_turn(turn, reference_date=reference_date)

    def start_turn(self, utterance: str) -> Optional[PendingTurn]:
        """Mark the session busy and record the user message; raises ``OperationBusy``."""

        text = utterance.strip() if utterance else ""
        if not text:
            return None
        stamp = self.tracker.begin()
        history = self.history()
        self._append(ChatRole.USER, text)
        return PendingTurn(stamp=stamp, text=text, history=history)

    async def complete_turn(
        self, turn: PendingTurn, *, reference_date: Optional[datetime] = None
    ) -> Optional[ChatMessage]:
        stamp = turn.stamp
        anchor = reference_date or self.clock()

        try:
            reply = await self.bridge.ask(turn.text, self.store.snapshot(), anchor, turn.history)
        except BridgeUnavailable as exc:
            if not self.tracker.fail(stamp, str(exc)):
                return None
            logger.error("Chat turn failed: %s", exc)
            return self._append(ChatRole.ASSISTANT, APOLOGY_MESSAGE)
        except Exception as exc:
            self.tracker.fail(stamp, str(exc))
            raise

        if not self.tracker.is_current(stamp):
            self.tracker.succeed(stamp)
            return None

        try:
            outcome = self.executor.apply_turn(reply.tool_calls)
        except Exception as exc:
            self.tracker.fail(stamp, str(exc))
            raise
        self.tracker.succeed(stamp)
        return self._append(ChatRole.ASSISTANT, self._compose_reply(reply.reply_text, outcome))

    def cancel(self) -> None:
        if self.tracker.busy:
            self.tracker.supersede()

    def _compose_reply(self, reply_text: str, outcome: TurnOutcome) -> str:
        lines = [reply_text or ACKNOWLEDGEMENT]
        lines.extend(f"✨ {line}" for line in summarize_outcome(outcome))
        if outcome.rejected:
            logger.info("%d tool call(s) rejected in this turn", len(outcome.rejected))
        return "\n\n".join(lines)


__all__ = ["ACKNOWLEDGEMENT", "APOLOGY_MESSAGE", "ChatSession", "PendingTurn", "WELCOME_MESSAGE"]
