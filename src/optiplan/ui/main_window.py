from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QMainWindow, QMessageBox, QSplitter

from ..config import AppPalette
from ..config.settings import AppSettings
from ..domain import OperationBusy
from ..presentation import CONNECT_PROMPT_TEXT, CONNECT_PROMPT_TITLE, CalendarController
from ..utils.qt import TaskRunner
from .components.calendar_panel import CalendarPanel
from .components.chat_panel import ChatPanel
from .components.event_dialog import EventDialog
from .components.sidebar import Sidebar

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    # store commits can land on a pool thread; the signal hops them to the GUI thread
    store_changed = pyqtSignal(int)

    def __init__(self, *, controller: CalendarController, settings: AppSettings, palette: AppPalette) -> None:
        super().__init__()
        self.controller = controller
        self.settings = settings
        self.runner = TaskRunner()

        self.setWindowTitle(f"{settings.ui.app_name} — AI Calendar")
        self.resize(1400, 820)

        self.sidebar = Sidebar()
        self.calendar_panel = CalendarPanel(palette=palette)
        self.chat_panel = ChatPanel(session=controller.chat, runner=self.runner)
        self.chat_panel.setVisible(False)

        splitter = QSplitter()
        splitter.setOrientation(Qt.Orientation.Horizontal)
        splitter.addWidget(self.sidebar)
        splitter.addWidget(self.calendar_panel)
        splitter.addWidget(self.chat_panel)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)
        splitter.setStretchFactor(2, 2)

        self.setCentralWidget(splitter)

        self.sidebar.view_mode_selected.connect(self.set_view_mode)
        self.sidebar.sync_requested.connect(self.sync_calendar)
        self.sidebar.new_event_requested.connect(self.create_event)
        self.sidebar.assistant_toggled.connect(self.toggle_assistant)

        self.calendar_panel.previous_requested.connect(lambda: self._navigate(self.controller.go_previous))
        self.calendar_panel.next_requested.connect(lambda: self._navigate(self.controller.go_next))
        self.calendar_panel.today_requested.connect(lambda: self._navigate(self.controller.go_today))
        self.calendar_panel.day_selected.connect(self.open_day)

        self.chat_panel.turn_completed.connect(self.refresh)
        self.store_changed.connect(lambda _version: self.refresh())
        self._unsubscribe = self.controller.subscribe(self.store_changed.emit)

        self.refresh()

    # ------------------------------------------------------------------ rendering

    def refresh(self) -> None:
        self.calendar_panel.show_view(self.controller.render())
        self.sidebar.set_sync_state(busy=self.controller.syncing, connected=self.controller.connected)

    def _navigate(self, move) -> None:
        move()
        self.refresh()

    def set_view_mode(self, mode: str) -> None:
        self.controller.set_view_mode(mode)
        self.refresh()

    def open_day(self, day) -> None:
        self.controller.select_date(day)
        self.refresh()

    def toggle_assistant(self) -> None:
        self.chat_panel.setVisible(not self.chat_panel.isVisible())

    # ------------------------------------------------------------------ actions

    def create_event(self) -> None:
        dialog = EventDialog(form=self.controller.new_form())
        if dialog.exec() != EventDialog.DialogCode.Accepted:
            return
        event = self.controller.submit_form(dialog.values())
        self.statusBar().showMessage(f"Event '{event.title}' added.", 3000)
        self.refresh()

    def sync_calendar(self) -> None:
        if self.controller.syncing:
            return
        if self.controller.needs_connect_prompt and not self._confirm_connect():
            return
        try:
            stamp = self.controller.start_sync()
        except OperationBusy:
            return
        self.sidebar.set_sync_state(busy=True, connected=self.controller.connected)
        self.statusBar().showMessage("Syncing external calendar…")

        def done(applied: bool) -> None:
            self.refresh()
            if self.controller.last_alert:
                alert = self.controller.last_alert
                self.controller.dismiss_alert()
                self.statusBar().clearMessage()
                QMessageBox.warning(self, "Sync", alert)
            elif applied:
                self.statusBar().showMessage("External calendar synchronized.", 4000)

        self.runner.submit_async(
            lambda: self.controller.sync(stamp), label="sync", on_success=done, on_error=self._handle_error
        )

    def _confirm_connect(self) -> bool:
        answer = QMessageBox.question(
            self,
            CONNECT_PROMPT_TITLE,
            CONNECT_PROMPT_TEXT,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.Yes,
        )
        return answer == QMessageBox.StandardButton.Yes

    # ------------------------------------------------------------------ misc

    def closeEvent(self, event) -> None:  # noqa: N802
        self._unsubscribe()
        super().closeEvent(event)

    def _handle_error(self, exc: Exception) -> None:
        self.refresh()
        if isinstance(exc, OperationBusy):
            return
        logger.error("Background operation failed: %s", exc)
        self.statusBar().showMessage(f"Error: {exc}", 5000)
        QMessageBox.critical(self, "Error", str(exc))
