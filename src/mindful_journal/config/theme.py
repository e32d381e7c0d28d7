from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppPalette:
    background_primary: str = "#fafaf9"
    background_secondary: str = "#f5f5f4"
    surface: str = "#ffffff"
    accent_primary: str = "#4f46e5"
    accent_hover: str = "#4338ca"
    accent_soft: str = "#eef2ff"
    text_primary: str = "#292524"
    text_muted: str = "#a8a29e"
    border_subtle: str = "#e7e5e4"

    def as_stylesheet(self) -> str:
        """Global stylesheet for the journal window."""

        return f"""
        QWidget {{
            background-color: {self.background_primary};
            color: {self.text_primary};
            font-family: 'Helvetica Neue', 'Segoe UI', Arial, sans-serif;
            font-size: 14px;
        }}
        QPushButton {{
            background-color: {self.accent_primary};
            color: {self.surface};
            border: none;
            padding: 8px 14px;
            border-radius: 10px;
            font-weight: 600;
        }}
        QPushButton:hover {{
            background-color: {self.accent_hover};
        }}
        QPushButton:disabled {{
            background-color: {self.border_subtle};
            color: {self.text_muted};
        }}
        QLineEdit, QTextEdit, QPlainTextEdit {{
            background-color: {self.surface};
            border: 1px solid {self.border_subtle};
            border-radius: 10px;
            padding: 8px 10px;
        }}
        QLineEdit:focus, QTextEdit:focus, QPlainTextEdit:focus {{
            border-color: {self.accent_primary};
        }}
        QPlainTextEdit {{
            font-family: Georgia, 'Times New Roman', serif;
            font-size: 17px;
        }}
        QListWidget {{
            background-color: {self.surface};
            border: 1px solid {self.border_subtle};
            border-radius: 10px;
        }}
        QListWidget::item:hover {{
            background-color: {self.accent_soft};
        }}
        QLabel#title {{
            font-size: 18px;
            font-weight: 700;
        }}
        QWidget#sidebarPanel, QWidget#calendarPanel, QWidget#chatPanel, QWidget#entryEditor {{
            background-color: {self.background_primary};
        }}
        QSplitter::handle {{
            background: {self.border_subtle};
            width: 1px;
        }}
        QTextEdit#chatTranscript {{
            background-color: {self.surface};
            padding: 12px;
        }}
        """
