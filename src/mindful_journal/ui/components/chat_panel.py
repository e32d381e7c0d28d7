from __future__ import annotations

import html
from typing import Iterable

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QLineEdit, QPushButton, QTextEdit, QVBoxLayout, QWidget

from ...domain import ChatMessage, Role


class ChatPanel(QWidget):
    message_submitted = pyqtSignal(str)

    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("chatPanel")
        self._processing = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        self.transcript = QTextEdit()
        self.transcript.setObjectName("chatTranscript")
        self.transcript.setReadOnly(True)
        self.transcript.setPlaceholderText("Tell the journal agent about your day...")
        layout.addWidget(self.transcript, stretch=1)

        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

        input_row = QHBoxLayout()
        self.input_line = QLineEdit()
        self.input_line.setPlaceholderText("Type your thoughts...")
        self.input_line.returnPressed.connect(self._send)
        input_row.addWidget(self.input_line)

        self.send_button = QPushButton("Send")
        self.send_button.clicked.connect(self._send)
        input_row.addWidget(self.send_button)
        layout.addLayout(input_row)

    def render_messages(self, messages: Iterable[ChatMessage]) -> None:
        self.transcript.clear()
        for message in messages:
            prefix = "You" if message.role is Role.USER else "Journal Agent"
            body = html.escape(message.text).replace("\n", "<br>")
            self.transcript.append(f"<b>{prefix}:</b> {body}")

    def append_pending(self, text: str) -> None:
        self.transcript.append(f"<b>You:</b> {html.escape(text)}")

    def set_processing(self, processing: bool) -> None:
        self._processing = processing
        self.input_line.setEnabled(not processing)
        self.send_button.setEnabled(not processing)
        self.status_label.setText("Thinking..." if processing else "")

    def _send(self) -> None:
        message = self.input_line.text().strip()
        if not message or self._processing:
            return
        self.input_line.clear()
        self.message_submitted.emit(message)
