from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from ...presentation import ViewMode


class Sidebar(QWidget):
    view_mode_selected = pyqtSignal(str)
    sync_requested = pyqtSignal()
    new_event_requested = pyqtSignal()
    assistant_toggled = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("sidebarPanel")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        brand = QLabel("OptiPlan")
        brand.setObjectName("title")
        layout.addWidget(brand)

        day_button = QPushButton("Day")
        day_button.setObjectName("secondaryButton")
        day_button.clicked.connect(lambda: self.view_mode_selected.emit(ViewMode.DAY.value))
        layout.addWidget(day_button)

        month_button = QPushButton("Month")
        month_button.setObjectName("secondaryButton")
        month_button.clicked.connect(lambda: self.view_mode_selected.emit(ViewMode.MONTH.value))
        layout.addWidget(month_button)

        new_event = QPushButton("Add Event")
        new_event.clicked.connect(self.new_event_requested)
        layout.addWidget(new_event)

        layout.addStretch(1)

        self.sync_button = QPushButton("Sync Calendar")
        self.sync_button.clicked.connect(self.sync_requested)
        layout.addWidget(self.sync_button)

        assistant = QPushButton("Assistant")
        assistant.setObjectName("secondaryButton")
        assistant.clicked.connect(self.assistant_toggled)
        layout.addWidget(assistant)

    def set_sync_state(self, *, busy: bool, connected: bool) -> None:
        self.sync_button.setEnabled(not busy)
        if busy:
            self.sync_button.setText("Syncing…")
        elif connected:
            self.sync_button.setText("Synced ✓")
        else:
            self.sync_button.setText("Sync Calendar")
