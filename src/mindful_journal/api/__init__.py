"""Wire payloads shared by the HTTP surface."""

from __future__ import annotations

from .models import (
    CalendarDayPayload,
    CalendarMonthPayload,
    ChatRequest,
    EntryPayload,
    EntryWriteRequest,
    MessagePayload,
    SelectionPayload,
    SelectionRequest,
    calendar_day,
)

__all__ = [
    "CalendarDayPayload",
    "CalendarMonthPayload",
    "ChatRequest",
    "EntryPayload",
    "EntryWriteRequest",
    "MessagePayload",
    "SelectionPayload",
    "SelectionRequest",
    "calendar_day",
]
