from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain import ChatMessage, DiaryEntry


class EntryPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str
    content: str
    mood: Optional[str] = Field(default=None)
    last_updated: int

    @classmethod
    def from_domain(cls, entry: DiaryEntry) -> "EntryPayload":
        return cls(
            date=entry.date,
            content=entry.content,
            mood=entry.mood.value if entry.mood else None,
            last_updated=entry.last_updated,
        )


class MessagePayload(BaseModel):
    id: str
    role: str
    text: str
    timestamp: int

    @classmethod
    def from_domain(cls, message: ChatMessage) -> "MessagePayload":
        return cls(id=message.id, role=message.role.value, text=message.text, timestamp=message.timestamp)


class EntryWriteRequest(BaseModel):
    content: str


class ChatRequest(BaseModel):
    text: str


class SelectionRequest(BaseModel):
    date: str


class SelectionPayload(BaseModel):
    date: str
    entry: Optional[EntryPayload] = Field(default=None)


class CalendarDayPayload(BaseModel):
    date: Optional[str] = Field(default=None)
    day: Optional[int] = Field(default=None)
    has_entry: bool = False
    is_selected: bool = False
    is_today: bool = False


class CalendarMonthPayload(BaseModel):
    year: int
    month: int
    month_name: str
    weekdays: List[str]
    days: List[CalendarDayPayload]


def calendar_day(day: Optional[date], *, has_entry: bool, selected: date, today: date) -> CalendarDayPayload:
    if day is None:
        return CalendarDayPayload()
    return CalendarDayPayload(
        date=day.isoformat(),
        day=day.day,
        has_entry=has_entry,
        is_selected=day == selected,
        is_today=day == today,
    )
