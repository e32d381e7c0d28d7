from __future__ import annotations

from datetime import date
from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPlainTextEdit, QPushButton, QVBoxLayout, QWidget

from ...domain import DiaryEntry


class EntryEditor(QWidget):
    save_requested = pyqtSignal(str)

    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("entryEditor")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QHBoxLayout()
        self.date_label = QLabel("")
        self.date_label.setObjectName("title")
        header.addWidget(self.date_label)
        header.addStretch(1)
        self.mood_label = QLabel("Daily Entry")
        header.addWidget(self.mood_label)
        layout.addLayout(header)

        self.editor = QPlainTextEdit()
        self.editor.setPlaceholderText("Start writing your day here...")
        layout.addWidget(self.editor, stretch=1)

        self.save_button = QPushButton("Save Entry")
        self.save_button.clicked.connect(self._save)
        layout.addWidget(self.save_button)

    def show_entry(self, day: date, entry: Optional[DiaryEntry]) -> None:
        self.date_label.setText(day.strftime("%A, %B %d, %Y"))
        self.mood_label.setText(f"Mood: {entry.mood.value}" if entry and entry.mood else "Daily Entry")
        self.editor.setPlainText(entry.content if entry else "")

    def _save(self) -> None:
        self.save_requested.emit(self.editor.toPlainText())
