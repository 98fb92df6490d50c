from __future__ import annotations

from datetime import date
from typing import Union

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QStackedWidget,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from ...config import AppPalette
from ...presentation import DayView, MonthView
from ..styles.theme import event_type_colors

_WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


class CalendarPanel(QWidget):
    previous_requested = pyqtSignal()
    next_requested = pyqtSignal()
    today_requested = pyqtSignal()
    day_selected = pyqtSignal(object)

    def __init__(self, *, palette: AppPalette) -> None:
        super().__init__()
        self.setObjectName("calendarPanel")
        self.today_color = QColor(palette.surface_alt)
        self.type_colors = event_type_colors(palette)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QHBoxLayout()
        self.title_label = QLabel("")
        self.title_label.setObjectName("title")
        header.addWidget(self.title_label, stretch=1)
        for text, signal in (("‹", self.previous_requested), ("Today", self.today_requested), ("›", self.next_requested)):
            button = QPushButton(text)
            button.setObjectName("secondaryButton")
            button.clicked.connect(signal)
            header.addWidget(button)
        layout.addLayout(header)

        self.stack = QStackedWidget()
        self.month_grid = QTableWidget(6, 7)
        self.month_grid.setHorizontalHeaderLabels(_WEEKDAY_HEADERS)
        self.month_grid.verticalHeader().setVisible(False)
        self.month_grid.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.month_grid.setWordWrap(True)
        self.month_grid.cellClicked.connect(self._on_cell_clicked)
        self.stack.addWidget(self.month_grid)

        self.day_list = QListWidget()
        self.stack.addWidget(self.day_list)
        layout.addWidget(self.stack, stretch=1)

        self.summary_label = QLabel("")
        self.summary_label.setObjectName("subtitle")
        layout.addWidget(self.summary_label)

    def show_view(self, view: Union[MonthView, DayView]) -> None:
        if isinstance(view, MonthView):
            self._show_month(view)
        else:
            self._show_day(view)

    # ------------------------------------------------------------------ month

    def _show_month(self, view: MonthView) -> None:
        self.title_label.setText(view.title)
        self.month_grid.clearContents()
        self.month_grid.setRowCount(len(view.weeks))
        for row, week in enumerate(view.weeks):
            for column, cell in enumerate(week):
                if cell is None:
                    continue
                lines = [str(cell.day.day)]
                lines.extend(event.title for event in cell.visible_events)
                if cell.overflow:
                    lines.append(f"+{cell.overflow} more")
                item = QTableWidgetItem("\n".join(lines))
                item.setData(Qt.ItemDataRole.UserRole, cell.day)
                item.setTextAlignment(Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignLeft)
                if cell.is_today:
                    item.setBackground(self.today_color)
                if cell.events:
                    item.setToolTip("\n".join(event.title for event in cell.events))
                self.month_grid.setItem(row, column, item)
        self.month_grid.resizeRowsToContents()
        self.summary_label.setText("")
        self.stack.setCurrentWidget(self.month_grid)

    def _on_cell_clicked(self, row: int, column: int) -> None:
        item = self.month_grid.item(row, column)
        if item is None:
            return
        day = item.data(Qt.ItemDataRole.UserRole)
        if isinstance(day, date):
            self.day_selected.emit(day)

    # ------------------------------------------------------------------ day

    def _show_day(self, view: DayView) -> None:
        self.title_label.setText(view.title)
        self.day_list.clear()
        for entry in view.entries:
            item = QListWidgetItem(entry.label)
            item.setForeground(self.type_colors[entry.event.type])
            item.setData(Qt.ItemDataRole.UserRole, entry.event)
            item.setToolTip(entry.event.description or "")
            self.day_list.addItem(item)
        if not view.entries:
            self.day_list.addItem(QListWidgetItem("No events"))
        self.summary_label.setText(f"{view.event_count} event(s)")
        self.stack.setCurrentWidget(self.day_list)
