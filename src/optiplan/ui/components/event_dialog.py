from __future__ import annotations

from PyQt6.QtCore import QDate
from PyQt6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QTextEdit,
    QVBoxLayout,
)

from ...domain import FORM_EVENT_TYPES, EventType, FormValidationError
from ...presentation import AddEventForm


class EventDialog(QDialog):
    """Collects an :class:`AddEventForm`; stays open while validation fails."""

    def __init__(self, *, form: AddEventForm) -> None:
        super().__init__()
        self.setWindowTitle("Add Event")
        self.form = form
        layout = QVBoxLayout(self)
        fields = QFormLayout()

        self.title_input = QLineEdit(form.title)
        self.title_input.setPlaceholderText("Title")
        fields.addRow("Title", self.title_input)

        self.date_input = QDateEdit()
        self.date_input.setCalendarPopup(True)
        self.date_input.setDate(QDate(form.date.year, form.date.month, form.date.day))
        fields.addRow("Date", self.date_input)

        self.start_input = QLineEdit(form.start_time)
        self.start_input.setInputMask("99:99")
        fields.addRow("Start", self.start_input)

        self.end_input = QLineEdit(form.end_time)
        self.end_input.setInputMask("99:99")
        fields.addRow("End", self.end_input)

        self.category_box = QComboBox()
        for event_type in FORM_EVENT_TYPES:
            self.category_box.addItem(event_type.value.title(), event_type)
        self.category_box.setCurrentIndex(FORM_EVENT_TYPES.index(EventType.coerce(form.category) or EventType.WORK))
        fields.addRow("Category", self.category_box)

        self.note_input = QTextEdit(form.note)
        self.note_input.setPlaceholderText("Notes")
        fields.addRow("Notes", self.note_input)

        layout.addLayout(fields)

        self.error_label = QLabel("")
        self.error_label.setObjectName("errorLabel")
        layout.addWidget(self.error_label)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self._try_accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def values(self) -> AddEventForm:
        self.form.title = self.title_input.text()
        self.form.date = self.date_input.date().toPyDate()
        self.form.start_time = self.start_input.text()
        self.form.end_time = self.end_input.text()
        self.form.category = self.category_box.currentData()
        self.form.note = self.note_input.toPlainText()
        return self.form

    def _try_accept(self) -> None:
        try:
            self.values().validate()
        except FormValidationError as exc:
            self.error_label.setText(str(exc))
            return
        self.accept()
