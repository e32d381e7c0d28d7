from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from ...domain import ChatMessage
from ..supabase import SupabaseGateway


@dataclass(slots=True)
class MessageRepository:
    gateway: SupabaseGateway
    table_name: str

    def fetch_ordered(self) -> List[Dict[str, Any]]:
        response = (
            self.gateway.ensure_client()
            .table(self.table_name)
            .select("*")
            .order("timestamp", desc=False)
            .execute()
        )
        return list(response.data or [])

    def upsert(self, message: ChatMessage) -> None:
        (
            self.gateway.ensure_client()
            .table(self.table_name)
            .upsert(message.to_record(), on_conflict="id")
            .execute()
        )
