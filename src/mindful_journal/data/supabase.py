from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from supabase import Client, create_client

from ..config.settings import SupabaseSettings


class SupabaseNotInitializedError(RuntimeError):
    """Raised when accessing the Supabase client without usable settings."""


@dataclass
class SupabaseGateway:
    """Thin wrapper around the Supabase Python client."""

    settings: SupabaseSettings
    _client: Optional[Client] = None

    def ensure_client(self) -> Client:
        if self._client is not None:
            return self._client
        if not self.settings.is_configured:
            raise SupabaseNotInitializedError("Supabase settings are missing URL or anon key.")
        self._client = create_client(self.settings.url, self.settings.anon_key)
        return self._client

    def is_ready(self) -> bool:
        return self._client is not None

    def table(self, name: str):
        return self.ensure_client().table(name)
