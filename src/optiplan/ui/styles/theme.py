from __future__ import annotations

from typing import Dict

from PyQt6.QtGui import QColor, QFont, QPalette
from PyQt6.QtWidgets import QApplication

from ...config import AppPalette
from ...domain import EventType


def apply_palette(app: QApplication, palette: AppPalette) -> None:
    roles = {
        QPalette.ColorRole.Window: palette.background_primary,
        QPalette.ColorRole.WindowText: palette.text_primary,
        QPalette.ColorRole.Base: palette.background_secondary,
        QPalette.ColorRole.AlternateBase: palette.surface_alt,
        QPalette.ColorRole.Text: palette.text_primary,
        QPalette.ColorRole.PlaceholderText: palette.text_secondary,
        QPalette.ColorRole.Button: palette.accent_primary,
        QPalette.ColorRole.ButtonText: palette.background_secondary,
        QPalette.ColorRole.Highlight: palette.accent_secondary,
        QPalette.ColorRole.HighlightedText: palette.background_secondary,
    }
    qt_palette = QPalette()
    for role, color in roles.items():
        qt_palette.setColor(role, QColor(color))
    app.setPalette(qt_palette)
    app.setFont(QFont("Noto Sans CJK JP", 10))
    app.setStyleSheet(palette.as_stylesheet())


def event_type_colors(palette: AppPalette) -> Dict[EventType, QColor]:
    return {event_type: QColor(palette.color_for(event_type)) for event_type in EventType}
