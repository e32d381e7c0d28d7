"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    AppSettings,
    ChatSettings,
    LlmSettings,
    StorageSettings,
    SupabaseSettings,
    UiSettings,
    get_settings,
)
from .theme import AppPalette

__all__ = [
    "AppPalette",
    "AppSettings",
    "ChatSettings",
    "LlmSettings",
    "StorageSettings",
    "SupabaseSettings",
    "UiSettings",
    "get_settings",
]
