"""Data access layer."""

from __future__ import annotations

from .local_store import LocalKeyValueStore, LocalStoreError
from .supabase import SupabaseGateway, SupabaseNotInitializedError

__all__ = [
    "LocalKeyValueStore",
    "LocalStoreError",
    "SupabaseGateway",
    "SupabaseNotInitializedError",
]
