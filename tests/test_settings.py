"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from mindful_journal.config import get_settings

ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "SUPABASE_ENTRIES_TABLE",
    "JOURNAL_LOCAL_STORE_PATH",
    "JOURNAL_HISTORY_WINDOW",
    "JOURNAL_TEMPERATURE",
    "JOURNAL_INDEX_MAX_CHARS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = get_settings()

    assert not settings.llm.is_configured
    assert settings.llm.missing_env_vars == ["OPENAI_API_KEY"]
    assert settings.llm.model == "gpt-4o-mini"
    assert not settings.supabase.is_configured
    assert settings.storage.entries_table == "diary_entries"
    assert settings.storage.chat_table == "chat_history"
    assert settings.storage.entries_key == "mindful_journal_entries"
    assert settings.storage.chat_key == "mindful_journal_chat"
    assert settings.chat.history_window == 15
    assert settings.chat.temperature == 0.7
    assert settings.chat.index_max_chars is None


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("SUPABASE_ENTRIES_TABLE", "entries_v2")
    monkeypatch.setenv("JOURNAL_LOCAL_STORE_PATH", str(tmp_path / "store.json"))
    monkeypatch.setenv("JOURNAL_HISTORY_WINDOW", "4")
    monkeypatch.setenv("JOURNAL_TEMPERATURE", "0.2")
    monkeypatch.setenv("JOURNAL_INDEX_MAX_CHARS", "200")

    settings = get_settings()

    assert settings.llm.is_configured
    assert settings.supabase.is_configured
    assert settings.storage.entries_table == "entries_v2"
    assert settings.storage.local_path == Path(tmp_path / "store.json")
    assert settings.chat.history_window == 4
    assert settings.chat.temperature == 0.2
    assert settings.chat.index_max_chars == 200


def test_unparseable_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("JOURNAL_HISTORY_WINDOW", "many")
    monkeypatch.setenv("JOURNAL_TEMPERATURE", "warm")

    settings = get_settings()

    assert settings.chat.history_window == 15
    assert settings.chat.temperature == 0.7


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_zero_history_window_is_kept(monkeypatch):
    monkeypatch.setenv("JOURNAL_HISTORY_WINDOW", "0")

    assert get_settings().chat.history_window == 0
