from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from ...domain import DiaryEntry
from ..supabase import SupabaseGateway


@dataclass(slots=True)
class EntryRepository:
    gateway: SupabaseGateway
    table_name: str

    def fetch_all(self) -> List[Dict[str, Any]]:
        response = self.gateway.ensure_client().table(self.table_name).select("*").execute()
        return list(response.data or [])

    def upsert(self, entry: DiaryEntry) -> None:
        (
            self.gateway.ensure_client()
            .table(self.table_name)
            .upsert(entry.to_record(), on_conflict="date")
            .execute()
        )
