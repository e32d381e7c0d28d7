"""Supabase repositories for journal records."""

from __future__ import annotations

from .entries import EntryRepository
from .messages import MessageRepository

__all__ = ["EntryRepository", "MessageRepository"]
