"""Shared fixtures for the journal test-suite."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from mindful_journal.assistant import AssistantReply
from mindful_journal.config.settings import (
    AppSettings,
    ChatSettings,
    LlmSettings,
    StorageSettings,
    SupabaseSettings,
    UiSettings,
)
from mindful_journal.domain import ChatMessage, DiaryEntry
from mindful_journal.orchestrator import JournalOrchestrator
from mindful_journal.services.storage import JournalStorage


def make_settings(
    tmp_path: Path,
    *,
    api_key: Optional[str] = "test-key",
    supabase_url: Optional[str] = None,
    history_window: int = 15,
    index_max_chars: Optional[int] = None,
) -> AppSettings:
    return AppSettings(
        llm=LlmSettings(
            api_key=api_key,
            model="test-model",
            base_url=None,
            api_version=None,
            organization=None,
            project=None,
        ),
        supabase=SupabaseSettings(url=supabase_url, anon_key="anon" if supabase_url else None),
        storage=StorageSettings(
            entries_table="diary_entries",
            chat_table="chat_history",
            local_path=tmp_path / "local_storage.json",
            entries_key="mindful_journal_entries",
            chat_key="mindful_journal_chat",
        ),
        chat=ChatSettings(history_window=history_window, temperature=0.7, index_max_chars=index_max_chars),
        ui=UiSettings(app_name="Mindful Journal", organization="MindfulJournal"),
    )


class MemoryStorage(JournalStorage):
    """In-memory backend that records every write."""

    name = "memory"

    def __init__(self, *, blocking_writes: bool = True) -> None:
        self.blocking_writes = blocking_writes
        self.saved_entries: Dict[str, DiaryEntry] = {}
        self.saved_messages: List[ChatMessage] = []

    def load_entries(self) -> Dict[str, DiaryEntry]:
        return dict(self.saved_entries)

    def save_entry(self, entry: DiaryEntry) -> None:
        self.saved_entries[entry.date] = entry

    def load_chat(self) -> List[ChatMessage]:
        return list(self.saved_messages)

    def save_message(self, message: ChatMessage) -> None:
        self.saved_messages.append(message)


class FakeGateway:
    """Returns a scripted reply and records what it was asked."""

    def __init__(self, reply: Optional[AssistantReply] = None, *, error: Optional[Exception] = None) -> None:
        self.reply = reply or AssistantReply(text="Sounds lovely.")
        self.error = error
        self.calls: list[dict] = []

    def generate_response(self, history, entries, selected_date_key, user_text) -> AssistantReply:
        self.calls.append(
            {
                "history": list(history),
                "entries": dict(entries),
                "selected_date_key": selected_date_key,
                "user_text": user_text,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return make_settings(tmp_path)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def orchestrator(storage: MemoryStorage, gateway: FakeGateway) -> JournalOrchestrator:
    journal = JournalOrchestrator(storage=storage, gateway=gateway, today=date(2024, 3, 10))
    journal.load()
    yield journal
    journal.close()
