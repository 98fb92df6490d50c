from __future__ import annotations

import html
from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QLineEdit, QPushButton, QTextEdit, QVBoxLayout, QWidget

from ...assistant import ChatSession
from ...domain import ChatMessage, ChatRole, OperationBusy
from ...utils.qt import TaskRunner


class ChatPanel(QWidget):
    turn_completed = pyqtSignal()

    def __init__(self, *, session: ChatSession, runner: TaskRunner) -> None:
        super().__init__()
        self.setObjectName("chatPanel")
        self.session = session
        self.runner = runner

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        self.transcript = QTextEdit()
        self.transcript.setObjectName("chatTranscript")
        self.transcript.setReadOnly(True)
        layout.addWidget(self.transcript)

        input_row = QHBoxLayout()
        self.input_line = QLineEdit()
        self.input_line.setPlaceholderText("e.g. Add a meeting tomorrow at 3pm")
        self.input_line.returnPressed.connect(self._send)
        input_row.addWidget(self.input_line)

        self.send_button = QPushButton("Send")
        self.send_button.clicked.connect(self._send)
        input_row.addWidget(self.send_button)
        layout.addLayout(input_row)

        self.refresh_transcript()

    def refresh_transcript(self) -> None:
        self.transcript.clear()
        for message in self.session.messages:
            self._append(message)
        if self.session.busy:
            self.transcript.append("<i>Assistant is thinking…</i>")

    def _append(self, message: ChatMessage) -> None:
        prefix = "You" if message.role == ChatRole.USER else "OptiPlan"
        body = html.escape(message.text).replace("\n", "<br>")
        self.transcript.append(f"<b>{prefix}:</b> {body}")

    def _set_busy(self, busy: bool) -> None:
        self.input_line.setEnabled(not busy)
        self.send_button.setEnabled(not busy)

    def _send(self) -> None:
        text = self.input_line.text().strip()
        if not text or self.session.busy:
            return
        try:
            turn = self.session.start_turn(text)
        except OperationBusy:
            return
        if turn is None:
            return
        self.input_line.clear()
        self._set_busy(True)

        def done(_reply: Optional[ChatMessage]) -> None:
            self._set_busy(False)
            self.refresh_transcript()
            self.turn_completed.emit()

        def fail(exc: Exception) -> None:
            self._set_busy(False)
            self.refresh_transcript()
            if not isinstance(exc, OperationBusy):
                self.transcript.append(f"<b>Error:</b> {html.escape(str(exc))}")

        self.runner.submit_async(
            lambda: self.session.complete_turn(turn), label="chat", on_success=done, on_error=fail
        )
        self.refresh_transcript()
