from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QMainWindow, QSplitter

from ..config.settings import AppSettings
from ..domain import ChatMessage, DiaryEntry
from ..orchestrator import JournalOrchestrator
from ..utils.qt import TaskRunner
from .components.calendar_panel import CalendarPanel
from .components.chat_panel import ChatPanel
from .components.entry_editor import EntryEditor
from .components.sidebar import Sidebar

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, *, orchestrator: JournalOrchestrator, settings: AppSettings, storage_name: str) -> None:
        super().__init__()
        self.orchestrator = orchestrator
        self.settings = settings
        self.runner = TaskRunner()

        self.setWindowTitle(f"{settings.ui.app_name}: AI-Powered Reflection")
        self.resize(1400, 820)

        self.sidebar = Sidebar()
        self.calendar_panel = CalendarPanel()
        self.chat_panel = ChatPanel()
        self.entry_editor = EntryEditor()

        splitter = QSplitter()
        splitter.setOrientation(Qt.Orientation.Horizontal)
        splitter.addWidget(self.sidebar)
        splitter.addWidget(self.calendar_panel)
        splitter.addWidget(self.chat_panel)
        splitter.addWidget(self.entry_editor)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 2)
        splitter.setStretchFactor(2, 3)
        splitter.setStretchFactor(3, 4)
        self.setCentralWidget(splitter)

        self.sidebar.set_storage(storage_name)
        self.sidebar.suggestion_selected.connect(self.send_message)
        self.calendar_panel.day_changed.connect(self.select_day)
        self.chat_panel.message_submitted.connect(self.send_message)
        self.entry_editor.save_requested.connect(self.save_entry)

        self.refresh()

    # ------------------------------------------------------------------ rendering

    def refresh(self) -> None:
        selected = self.orchestrator.selected_date
        self.calendar_panel.set_day(selected)
        self.calendar_panel.mark_entries(self.orchestrator.entries.keys())
        self.entry_editor.show_entry(selected, self.orchestrator.current_entry)
        self.chat_panel.render_messages(self.orchestrator.messages)
        self.chat_panel.set_processing(self.orchestrator.is_processing)

    # ------------------------------------------------------------------ actions

    def select_day(self, day_iso: str) -> None:
        try:
            day = self.orchestrator.select_date(day_iso)
        except ValueError:
            logger.warning("Ignoring invalid calendar selection %r", day_iso)
            return
        self.entry_editor.show_entry(day, self.orchestrator.current_entry)

    def save_entry(self, content: str) -> None:
        def worker() -> DiaryEntry:
            return self.orchestrator.save_manual_entry(content)

        def done(entry: DiaryEntry) -> None:
            self.statusBar().showMessage(f"Entry saved for {entry.date}.", 3000)
            self.refresh()

        self.runner.submit(worker, on_success=done, on_error=self._handle_error)

    def send_message(self, text: str) -> None:
        if self.orchestrator.is_processing or not text.strip():
            return
        self.chat_panel.append_pending(text.strip())
        self.chat_panel.set_processing(True)

        def worker() -> Optional[ChatMessage]:
            return self.orchestrator.send_message(text)

        def done(_reply: Optional[ChatMessage]) -> None:
            self.refresh()

        def fail(exc: Exception) -> None:
            self._handle_error(exc)
            self.refresh()

        self.runner.submit(worker, on_success=done, on_error=fail)

    # ------------------------------------------------------------------ misc

    def _handle_error(self, exc: Exception) -> None:
        logger.error("UI task failed: %s", exc)
        self.statusBar().showMessage(f"Error: {exc}", 5000)

    def closeEvent(self, event) -> None:  # noqa: N802
        self.orchestrator.flush(timeout=5.0)
        super().closeEvent(event)
