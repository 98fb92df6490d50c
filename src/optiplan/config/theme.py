from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from ..domain import EventType


def _default_event_colors() -> Dict[EventType, str]:
    return {
        EventType.WORK: "#60a5fa",
        EventType.PERSONAL: "#4ade80",
        EventType.MEETING: "#c084fc",
        EventType.AI_SUGGESTED: "#fbbf24",
        EventType.EXTERNAL: "#f87171",
    }


@dataclass(frozen=True)
class AppPalette:
    background_primary: str = "#f3f4f6"
    background_secondary: str = "#ffffff"
    surface: str = "#ffffff"
    surface_alt: str = "#eef2ff"
    accent_primary: str = "#4f46e5"
    accent_secondary: str = "#6366f1"
    accent_error: str = "#ef4444"
    text_primary: str = "#111827"
    text_secondary: str = "#6b7280"
    border_subtle: str = "#e5e7eb"
    border_strong: str = "#d1d5db"
    event_colors: Dict[EventType, str] = field(default_factory=_default_event_colors)

    def color_for(self, event_type: EventType) -> str:
        return self.event_colors.get(event_type, self.text_secondary)

    def as_stylesheet(self) -> str:
        """Global stylesheet for the PyQt app."""

        return f"""
        QWidget {{
            background-color: {self.background_primary};
            color: {self.text_primary};
            font-family: 'Helvetica Neue', 'Segoe UI', 'Hiragino Sans', Arial, sans-serif;
            font-size: 14px;
        }}
        QPushButton {{
            background-color: {self.accent_primary};
            color: #ffffff;
            border: none;
            padding: 8px 14px;
            border-radius: 8px;
            font-weight: 600;
        }}
        QPushButton:hover {{
            background-color: {self.accent_secondary};
        }}
        QPushButton:disabled {{
            background-color: {self.border_strong};
            color: {self.text_secondary};
        }}
        QPushButton#secondaryButton {{
            background-color: transparent;
            color: {self.accent_primary};
            border: 1px solid {self.accent_primary};
        }}
        QLineEdit, QTextEdit, QComboBox, QDateEdit, QTimeEdit {{
            background-color: {self.background_secondary};
            color: {self.text_primary};
            border: 1px solid {self.border_strong};
            border-radius: 8px;
            padding: 6px 10px;
        }}
        QLineEdit:focus, QTextEdit:focus, QComboBox:focus, QDateEdit:focus, QTimeEdit:focus {{
            border-color: {self.accent_primary};
        }}
        QListView {{
            background-color: {self.background_secondary};
            border: 1px solid {self.border_subtle};
            selection-background-color: {self.surface_alt};
            selection-color: {self.text_primary};
        }}
        QLabel#title {{
            font-size: 20px;
            font-weight: 700;
        }}
        QLabel#subtitle {{
            color: {self.text_secondary};
        }}
        QLabel#errorLabel {{
            color: {self.accent_error};
        }}
        QWidget#sidebarPanel {{
            background-color: {self.surface};
            border-right: 1px solid {self.border_subtle};
        }}
        QWidget#calendarPanel, QWidget#chatPanel {{
            background-color: {self.surface};
        }}
        QTextEdit#chatTranscript {{
            background-color: {self.background_primary};
            border: 1px solid {self.border_subtle};
            border-radius: 12px;
            padding: 12px;
        }}
        """
