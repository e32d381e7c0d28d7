from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List

from ..domain import ChatMessage, DiaryEntry


@dataclass
class JournalState:
    """In-memory source of truth for the current session."""

    entries: Dict[str, DiaryEntry] = field(default_factory=dict)
    messages: List[ChatMessage] = field(default_factory=list)
    selected_date: date = field(default_factory=date.today)
    processing: bool = False
