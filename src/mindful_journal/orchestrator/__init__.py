"""Application state owner and chat turn coordination."""

from __future__ import annotations

from .journal import ERROR_TEXT, PROCESSED_TEXT, SAVED_TEMPLATE, WELCOME_TEXT, JournalOrchestrator
from .state import JournalState

__all__ = [
    "ERROR_TEXT",
    "PROCESSED_TEXT",
    "SAVED_TEMPLATE",
    "WELCOME_TEXT",
    "JournalOrchestrator",
    "JournalState",
]
