from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

import orjson

from ..config.settings import AppSettings, StorageSettings
from ..data import LocalKeyValueStore, SupabaseGateway
from ..data.repositories import EntryRepository, MessageRepository
from ..domain import ChatMessage, DiaryEntry

logger = logging.getLogger(__name__)


class JournalStorage(ABC):
    """Load/save contract shared by the local and remote backends.

    Implementations never raise: failed reads come back as empty collections
    and failed writes are logged and dropped.
    """

    name: str = "storage"
    blocking_writes: bool = True

    @abstractmethod
    def load_entries(self) -> Dict[str, DiaryEntry]:
        ...

    @abstractmethod
    def save_entry(self, entry: DiaryEntry) -> None:
        ...

    @abstractmethod
    def load_chat(self) -> List[ChatMessage]:
        ...

    @abstractmethod
    def save_message(self, message: ChatMessage) -> None:
        ...


def _entries_from_records(records: Iterable[Any]) -> Dict[str, DiaryEntry]:
    entries: Dict[str, DiaryEntry] = {}
    for record in records:
        try:
            entry = DiaryEntry.from_record(record)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed diary record %r: %s", record, exc)
            continue
        entries[entry.date] = entry
    return entries


def _messages_from_records(records: Iterable[Any]) -> List[ChatMessage]:
    messages: List[ChatMessage] = []
    for record in records:
        try:
            messages.append(ChatMessage.from_record(record))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed chat record %r: %s", record, exc)
    return messages


class LocalJournalStorage(JournalStorage):
    """Two serialized snapshots under fixed keys of a local key/value store."""

    name = "local"
    blocking_writes = True

    def __init__(self, store: LocalKeyValueStore, *, entries_key: str, chat_key: str) -> None:
        self.store = store
        self.entries_key = entries_key
        self.chat_key = chat_key

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "LocalJournalStorage":
        return cls(
            LocalKeyValueStore(settings.local_path),
            entries_key=settings.entries_key,
            chat_key=settings.chat_key,
        )

    def _entries_snapshot(self, raw: Optional[str]) -> Dict[str, Any]:
        payload = orjson.loads(raw) if raw is not None else {}
        if not isinstance(payload, dict):
            raise ValueError(f"Entries snapshot under {self.entries_key!r} is not a mapping.")
        return payload

    def _chat_snapshot(self, raw: Optional[str]) -> List[Any]:
        payload = orjson.loads(raw) if raw is not None else []
        if not isinstance(payload, list):
            raise ValueError(f"Chat snapshot under {self.chat_key!r} is not a list.")
        return payload

    def load_entries(self) -> Dict[str, DiaryEntry]:
        try:
            snapshot = self._entries_snapshot(self.store.get_item(self.entries_key))
        except Exception:  # noqa: BLE001
            logger.exception("Local entries load failed; starting empty")
            return {}
        return _entries_from_records(snapshot.values())

    def save_entry(self, entry: DiaryEntry) -> None:
        def merge(raw: Optional[str]) -> str:
            snapshot = self._entries_snapshot(raw)
            snapshot[entry.date] = entry.to_record()
            return orjson.dumps(snapshot).decode("utf-8")

        # Writes arrive from the background writer and request threads at once.
        try:
            self.store.update_item(self.entries_key, merge)
        except Exception:  # noqa: BLE001
            logger.exception("Local entry save failed for %s", entry.date)

    def load_chat(self) -> List[ChatMessage]:
        try:
            snapshot = self._chat_snapshot(self.store.get_item(self.chat_key))
        except Exception:  # noqa: BLE001
            logger.exception("Local chat load failed; starting empty")
            return []
        return sorted(_messages_from_records(snapshot), key=lambda message: message.timestamp)

    def save_message(self, message: ChatMessage) -> None:
        def append(raw: Optional[str]) -> str:
            snapshot = self._chat_snapshot(raw)
            snapshot.append(message.to_record())
            return orjson.dumps(snapshot).decode("utf-8")

        try:
            self.store.update_item(self.chat_key, append)
        except Exception:  # noqa: BLE001
            logger.exception("Local chat save failed for message %s", message.id)


class RemoteJournalStorage(JournalStorage):
    """One Supabase row per entry (keyed by date) and per message (keyed by id)."""

    name = "remote"
    blocking_writes = False

    def __init__(self, entries: EntryRepository, messages: MessageRepository) -> None:
        self.entries = entries
        self.messages = messages

    @classmethod
    def from_gateway(cls, gateway: SupabaseGateway, settings: StorageSettings) -> "RemoteJournalStorage":
        return cls(
            EntryRepository(gateway=gateway, table_name=settings.entries_table),
            MessageRepository(gateway=gateway, table_name=settings.chat_table),
        )

    def load_entries(self) -> Dict[str, DiaryEntry]:
        try:
            records = self.entries.fetch_all()
        except Exception:  # noqa: BLE001
            logger.exception("Supabase entries load failed; starting empty")
            return {}
        return _entries_from_records(records)

    def save_entry(self, entry: DiaryEntry) -> None:
        try:
            self.entries.upsert(entry)
        except Exception:  # noqa: BLE001
            logger.exception("Supabase entry save failed for %s", entry.date)

    def load_chat(self) -> List[ChatMessage]:
        try:
            records = self.messages.fetch_ordered()
        except Exception:  # noqa: BLE001
            logger.exception("Supabase chat load failed; starting empty")
            return []
        return _messages_from_records(records)

    def save_message(self, message: ChatMessage) -> None:
        try:
            self.messages.upsert(message)
        except Exception:  # noqa: BLE001
            logger.exception("Supabase chat save failed for message %s", message.id)


def build_storage(settings: AppSettings) -> JournalStorage:
    """Pick the backend once at startup: Supabase when usable, otherwise local."""

    if settings.supabase.is_configured:
        gateway = SupabaseGateway(settings.supabase)
        try:
            gateway.ensure_client()
        except Exception:  # noqa: BLE001
            logger.exception("Supabase client could not be created; falling back to local storage")
        else:
            logger.info("Using Supabase storage (%s, %s)", settings.storage.entries_table, settings.storage.chat_table)
            return RemoteJournalStorage.from_gateway(gateway, settings.storage)
    else:
        logger.warning("Supabase is not configured. Falling back to local storage.")

    logger.info("Using local storage at %s", settings.storage.local_path)
    return LocalJournalStorage.from_settings(settings.storage)


__all__ = [
    "JournalStorage",
    "LocalJournalStorage",
    "RemoteJournalStorage",
    "build_storage",
]
