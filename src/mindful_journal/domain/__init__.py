"""Domain models for the journal."""

from __future__ import annotations

from .enums import Mood, Role
from .models import ChatMessage, DiaryEntry, ToolInvocation, now_ms

__all__ = ["ChatMessage", "DiaryEntry", "Mood", "Role", "ToolInvocation", "now_ms"]
