"""Tests for LocalKeyValueStore."""

import threading

import orjson
import pytest

from mindful_journal.data import LocalKeyValueStore, LocalStoreError


def test_missing_file_reads_as_empty(tmp_path):
    store = LocalKeyValueStore(tmp_path / "nested" / "store.json")

    assert store.get_item("anything") is None
    assert store.keys() == []


def test_set_item_persists_to_disk(tmp_path):
    path = tmp_path / "nested" / "store.json"
    LocalKeyValueStore(path).set_item("greeting", "hello")

    assert orjson.loads(path.read_bytes()) == {"greeting": "hello"}
    assert LocalKeyValueStore(path).get_item("greeting") == "hello"


def test_remove_item(tmp_path):
    path = tmp_path / "store.json"
    store = LocalKeyValueStore(path)
    store.set_item("a", "1")
    store.set_item("b", "2")

    store.remove_item("a")
    store.remove_item("missing")

    assert LocalKeyValueStore(path).keys() == ["b"]


def test_blank_file_reads_as_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("  \n", encoding="utf-8")

    assert LocalKeyValueStore(path).keys() == []


@pytest.mark.parametrize("content", ["{broken", "[1, 2, 3]"])
def test_unreadable_file_raises(tmp_path, content):
    path = tmp_path / "store.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(LocalStoreError):
        LocalKeyValueStore(path).get_item("a")


def test_update_item_passes_current_value(tmp_path):
    store = LocalKeyValueStore(tmp_path / "store.json")
    store.set_item("count", "1")

    assert store.update_item("count", lambda raw: str(int(raw) + 1)) == "2"
    assert store.update_item("fresh", lambda raw: "seen" if raw is None else raw) == "seen"
    assert LocalKeyValueStore(tmp_path / "store.json").get_item("count") == "2"


def test_update_item_failure_leaves_value(tmp_path):
    store = LocalKeyValueStore(tmp_path / "store.json")
    store.set_item("a", "keep")

    def broken(_raw):
        raise ValueError("nope")

    with pytest.raises(ValueError):
        store.update_item("a", broken)

    assert store.get_item("a") == "keep"


def test_concurrent_updates_are_not_lost(tmp_path):
    store = LocalKeyValueStore(tmp_path / "store.json")
    store.set_item("items", "[]")

    def append(index):
        store.update_item("items", lambda raw: orjson.dumps(orjson.loads(raw) + [index]).decode())

    threads = [threading.Thread(target=append, args=(index,)) for index in range(50)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    saved = orjson.loads(LocalKeyValueStore(tmp_path / "store.json").get_item("items"))
    assert sorted(saved) == list(range(50))
