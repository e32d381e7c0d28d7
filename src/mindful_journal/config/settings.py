from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..core.config import DATA_DIR

load_dotenv()


@dataclass(frozen=True)
class LlmSettings:
    api_key: Optional[str]
    model: str
    base_url: Optional[str]
    api_version: Optional[str]
    organization: Optional[str]
    project: Optional[str]

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.model)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.api_key:
            missing.append("OPENAI_API_KEY")
        if not self.model:
            missing.append("OPENAI_MODEL")
        return missing


@dataclass(frozen=True)
class SupabaseSettings:
    url: Optional[str]
    anon_key: Optional[str]

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)


@dataclass(frozen=True)
class StorageSettings:
    entries_table: str
    chat_table: str
    local_path: Path
    entries_key: str
    chat_key: str


@dataclass(frozen=True)
class ChatSettings:
    history_window: int
    temperature: float
    index_max_chars: Optional[int]


@dataclass(frozen=True)
class UiSettings:
    app_name: str
    organization: str


@dataclass(frozen=True)
class AppSettings:
    llm: LlmSettings
    supabase: SupabaseSettings
    storage: StorageSettings
    chat: ChatSettings
    ui: UiSettings


def _int_from_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    llm = LlmSettings(
        api_key=os.getenv("OPENAI_API_KEY"),
        model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        base_url=os.getenv("OPENAI_BASE_URL"),
        api_version=os.getenv("OPENAI_API_VERSION"),
        organization=os.getenv("OPENAI_ORG"),
        project=os.getenv("OPENAI_PROJECT"),
    )

    supabase = SupabaseSettings(
        url=os.getenv("SUPABASE_URL"),
        anon_key=os.getenv("SUPABASE_ANON_KEY"),
    )

    storage = StorageSettings(
        entries_table=os.getenv("SUPABASE_ENTRIES_TABLE", "diary_entries"),
        chat_table=os.getenv("SUPABASE_CHAT_TABLE", "chat_history"),
        local_path=Path(os.getenv("JOURNAL_LOCAL_STORE_PATH", str(DATA_DIR / "local_storage.json"))),
        entries_key=os.getenv("JOURNAL_ENTRIES_KEY", "mindful_journal_entries"),
        chat_key=os.getenv("JOURNAL_CHAT_KEY", "mindful_journal_chat"),
    )

    chat = ChatSettings(
        history_window=_int_from_env("JOURNAL_HISTORY_WINDOW", 15),
        temperature=_float_from_env("JOURNAL_TEMPERATURE", 0.7),
        index_max_chars=_int_from_env("JOURNAL_INDEX_MAX_CHARS", None),
    )

    ui = UiSettings(
        app_name=os.getenv("JOURNAL_APP_NAME", "Mindful Journal"),
        organization=os.getenv("JOURNAL_APP_ORG", "MindfulJournal"),
    )

    return AppSettings(llm=llm, supabase=supabase, storage=storage, chat=chat, ui=ui)
