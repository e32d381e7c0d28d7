from __future__ import annotations

from datetime import date
from typing import Iterable

from PyQt6.QtCore import QDate, pyqtSignal
from PyQt6.QtGui import QColor, QFont, QTextCharFormat
from PyQt6.QtWidgets import QCalendarWidget, QLabel, QVBoxLayout, QWidget

from ...utils.dates import parse_date_key

_ENTRY_COLOR = "#7dd3fc"


class CalendarPanel(QWidget):
    day_changed = pyqtSignal(str)

    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("calendarPanel")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        self.date_label = QLabel("")
        self.date_label.setObjectName("title")
        layout.addWidget(self.date_label)

        self.calendar_widget = QCalendarWidget()
        self.calendar_widget.setGridVisible(False)
        self.calendar_widget.selectionChanged.connect(self._emit_day_change)
        layout.addWidget(self.calendar_widget)
        layout.addStretch(1)

        self._marked: list[QDate] = []
        self.set_day(date.today())

    def set_day(self, day: date) -> None:
        self.date_label.setText(day.strftime("%A, %d %B %Y"))
        target = QDate(day.year, day.month, day.day)
        if self.calendar_widget.selectedDate() != target:
            self.calendar_widget.blockSignals(True)
            self.calendar_widget.setSelectedDate(target)
            self.calendar_widget.blockSignals(False)

    def mark_entries(self, date_keys: Iterable[str]) -> None:
        for qdate in self._marked:
            self.calendar_widget.setDateTextFormat(qdate, QTextCharFormat())

        highlight = QTextCharFormat()
        highlight.setForeground(QColor(_ENTRY_COLOR))
        highlight.setFontWeight(QFont.Weight.Bold)

        self._marked = []
        for key in date_keys:
            try:
                day = parse_date_key(key)
            except ValueError:
                continue
            qdate = QDate(day.year, day.month, day.day)
            self.calendar_widget.setDateTextFormat(qdate, highlight)
            self._marked.append(qdate)

    def _emit_day_change(self) -> None:
        qdate = self.calendar_widget.selectedDate()
        self.date_label.setText(qdate.toString("dddd, dd MMMM yyyy"))
        self.day_changed.emit(qdate.toString("yyyy-MM-dd"))
