from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QLabel, QListWidget, QListWidgetItem, QVBoxLayout, QWidget

SUGGESTIONS = (
    ("What did I do last weekend?", "What did I do last weekend?"),
    ("Write an entry about coffee.", "Write a diary entry about a peaceful morning coffee."),
    ("Analyze my mood.", "Analyze my mood over the last few entries."),
)


class Sidebar(QWidget):
    suggestion_selected = pyqtSignal(str)

    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("sidebarPanel")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        self.storage_label = QLabel("")
        layout.addWidget(self.storage_label)

        layout.addWidget(QLabel("Suggestions"))
        self.suggestion_list = QListWidget()
        for label, prompt in SUGGESTIONS:
            item = QListWidgetItem(f"“{label}”")
            item.setData(Qt.ItemDataRole.UserRole, prompt)
            self.suggestion_list.addItem(item)
        self.suggestion_list.itemClicked.connect(self._emit_suggestion)
        layout.addWidget(self.suggestion_list, stretch=1)

    def set_storage(self, name: str) -> None:
        label = "Cloud sync (Supabase)" if name == "remote" else "Saved on this device"
        self.storage_label.setText(f"<b>Storage:</b> {label}")

    def _emit_suggestion(self, item: QListWidgetItem) -> None:
        self.suggestion_selected.emit(item.data(Qt.ItemDataRole.UserRole))
