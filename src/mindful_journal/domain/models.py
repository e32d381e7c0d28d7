from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from uuid import uuid4

from ..utils.dates import parse_date_key
from .enums import Mood, Role


def now_ms() -> int:
    return int(time.time() * 1000)


def _parse_millis(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError(f"Unsupported timestamp value: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        return int(float(value))
    raise ValueError(f"Unsupported timestamp value: {value!r}")


@dataclass(slots=True)
class DiaryEntry:
    date: str
    content: str
    mood: Optional[Mood] = None
    last_updated: int = field(default_factory=now_ms)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "DiaryEntry":
        key = str(record["date"])
        parse_date_key(key)
        mood = record.get("mood")
        return cls(
            date=key,
            content=str(record.get("content") or ""),
            mood=Mood.coerce(mood) if mood else None,
            last_updated=_parse_millis(record.get("last_updated")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "content": self.content,
            "mood": self.mood.value if self.mood else None,
            "last_updated": self.last_updated,
        }


@dataclass(frozen=True, slots=True)
class ChatMessage:
    id: str
    role: Role
    text: str
    timestamp: int

    @classmethod
    def create(cls, role: Role, text: str, *, after: Optional[int] = None) -> "ChatMessage":
        """New message stamped now, or just past ``after`` when the clock has not moved on."""

        timestamp = now_ms()
        if after is not None and timestamp <= after:
            timestamp = after + 1
        return cls(id=uuid4().hex, role=role, text=text, timestamp=timestamp)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ChatMessage":
        return cls(
            id=str(record["id"]),
            role=Role(record["role"]),
            text=str(record.get("text") or ""),
            timestamp=_parse_millis(record.get("timestamp")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role.value,
            "text": self.text,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True, slots=True)
class ToolInvocation:
    """A structured action requested by the assistant for the host to perform."""

    name: str
    args: Dict[str, Any] = field(default_factory=dict)
