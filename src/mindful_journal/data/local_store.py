from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Dict, Optional

import orjson


class LocalStoreError(RuntimeError):
    """Raised when the backing file cannot be read or written."""


class LocalKeyValueStore:
    """String key/value pairs persisted to a single JSON file.

    Values are opaque strings, mirroring how browser local storage holds
    serialized snapshots. The file is read lazily and rewritten on every
    mutation.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._state: Optional[Dict[str, str]] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_materialized(self) -> Dict[str, str]:
        if self._state is not None:
            return self._state
        if not self._path.exists():
            self._state = {}
            return self._state
        try:
            raw = self._path.read_bytes()
        except OSError as exc:
            raise LocalStoreError(f"Unable to read {self._path}: {exc}") from exc
        if not raw.strip():
            self._state = {}
            return self._state
        try:
            payload = orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            raise LocalStoreError(f"Corrupt key/value file {self._path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise LocalStoreError(f"Key/value file {self._path} does not hold an object.")
        self._state = {str(key): str(value) for key, value in payload.items() if isinstance(value, str)}
        return self._state

    def _persist(self) -> None:
        if self._state is None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_bytes(orjson.dumps(self._state, option=orjson.OPT_INDENT_2) + b"\n")
        except OSError as exc:
            raise LocalStoreError(f"Unable to write {self._path}: {exc}") from exc

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._ensure_materialized().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._ensure_materialized()[key] = value
            self._persist()

    def update_item(self, key: str, fn: Callable[[Optional[str]], str]) -> str:
        """Replace the value under ``key`` with ``fn(current)`` as one locked step.

        Exceptions raised by ``fn`` propagate and leave the store unchanged.
        """

        with self._lock:
            state = self._ensure_materialized()
            value = fn(state.get(key))
            state[key] = value
            self._persist()
            return value

    def remove_item(self, key: str) -> None:
        with self._lock:
            if self._ensure_materialized().pop(key, None) is not None:
                self._persist()

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._ensure_materialized())


__all__ = ["LocalKeyValueStore", "LocalStoreError"]
