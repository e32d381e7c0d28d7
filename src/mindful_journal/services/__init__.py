"""Persistence adapters and background write dispatch."""

from __future__ import annotations

from .storage import JournalStorage, LocalJournalStorage, RemoteJournalStorage, build_storage
from .writer import BackgroundWriter

__all__ = [
    "BackgroundWriter",
    "JournalStorage",
    "LocalJournalStorage",
    "RemoteJournalStorage",
    "build_storage",
]
