"""Conversational assistant that can read and write the diary."""

from __future__ import annotations

from .gateway import FALLBACK_TEXT, AssistantGateway, AssistantReply, build_diary_index, build_system_prompt
from .tools import UPDATE_DIARY, UPDATE_DIARY_TOOL

__all__ = [
    "FALLBACK_TEXT",
    "UPDATE_DIARY",
    "UPDATE_DIARY_TOOL",
    "AssistantGateway",
    "AssistantReply",
    "build_diary_index",
    "build_system_prompt",
]
