"""Key-value storage abstractions with JSON-file and SQLite implementations."""
from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Dict, Optional

from yourfit_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)


class KeyValueStore:
    """String key to string value persistence interface."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JSONFileKeyValueStore(KeyValueStore):
    """Single JSON object file on disk, rewritten on every ``set``."""

    def __init__(self, path: str | Path = "data/yourfit.json") -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as exc:
            self._report_invalid(error=str(exc))
            return {}
        if not isinstance(data, dict):
            self._report_invalid(error=f"expected an object, found {type(data).__name__}")
            return {}
        dropped = sorted(str(key) for key, value in data.items() if not isinstance(value, str))
        if dropped:
            self._report_invalid(error="non-string values dropped", dropped_keys=dropped)
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _report_invalid(self, **fields: object) -> None:
        log_event(LOGGER, logging.ERROR, "persisted_state_invalid", store=str(self.path), **fields)

    def _save(self, data: Dict[str, str]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2))
        tmp_path.replace(self.path)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)


class SQLiteKeyValueStore(KeyValueStore):
    """SQLite-backed store with a single ``kv`` table."""

    def __init__(self, db_path: str | Path = "data/yourfit.db") -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
                """
            )

    def get(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO kv(key, value) VALUES (?, ?)\n"
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, value),
            )

    def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))


def build_kv_store(backend: str, path: str | Path | None = None) -> KeyValueStore:
    """Return the store for a configured backend name."""

    backend_key = backend.strip().lower()
    if backend_key == "memory":
        return InMemoryKeyValueStore()
    if backend_key == "sqlite":
        return SQLiteKeyValueStore(path or "data/yourfit.db")
    if backend_key == "json":
        return JSONFileKeyValueStore(path or "data/yourfit.json")
    raise ValueError(f"Unsupported storage backend '{backend}'")


__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JSONFileKeyValueStore",
    "SQLiteKeyValueStore",
    "build_kv_store",
]
