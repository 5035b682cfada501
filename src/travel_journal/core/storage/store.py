"""Key-value stores for JSON values: SQLite-backed and in-memory.

Persistence is best effort. A store created with strict=False (the default)
logs read and write failures and carries on: get() answers None and set()
returns without persisting. With strict=True the failure is raised as
StorageFailure instead.
"""

import json
import sqlite3
import threading
import time
from pathlib import Path
from typing import Any

from loguru import logger

from travel_journal.core.storage.schema import migrate_schema
from travel_journal.errors import StorageFailure


class SqliteStore:
    """JSON values in the kv table of an SQLite database."""

    def __init__(self, conn: sqlite3.Connection, *, strict: bool = False) -> None:
        self._conn = conn
        self.strict = strict
        # Autosave timers write from a worker thread.
        self._lock = threading.Lock()
        migrate_schema(conn)

    @classmethod
    def connect(cls, db_path: str | Path, *, strict: bool = False) -> "SqliteStore":
        """Open (creating if needed) the database at db_path."""
        conn = sqlite3.connect(str(db_path), check_same_thread=False)
        try:
            return cls(conn, strict=strict)
        except StorageFailure:
            conn.close()
            raise

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def get(self, key: str) -> Any | None:
        try:
            with self._lock:
                row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            self._fail(f"Failed to read {key!r}", e)
            return None
        if row is None:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError:
            logger.warning("Ignoring undecodable value stored under {}", key)
            return None

    def set(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value)
            with self._lock:
                self._conn.execute(
                    "INSERT OR REPLACE INTO kv (key, value, updated_at) VALUES (?, ?, ?)",
                    (key, payload, int(time.time() * 1000)),
                )
                self._conn.commit()
        except (TypeError, ValueError, sqlite3.Error) as e:
            self._fail(f"Failed to persist {key!r}", e)

    def delete(self, key: str) -> None:
        try:
            with self._lock:
                self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
                self._conn.commit()
        except sqlite3.Error as e:
            self._fail(f"Failed to delete {key!r}", e)

    def keys(self, prefix: str = "") -> list[str]:
        """Return stored keys starting with prefix, sorted."""
        try:
            with self._lock:
                rows = self._conn.execute(
                    "SELECT key FROM kv WHERE substr(key, 1, ?) = ? ORDER BY key",
                    (len(prefix), prefix),
                ).fetchall()
        except sqlite3.Error as e:
            self._fail(f"Failed to list keys under {prefix!r}", e)
            return []
        return [r[0] for r in rows]

    def _fail(self, msg: str, error: Exception) -> None:
        if self.strict:
            raise StorageFailure(msg) from error
        logger.opt(exception=error).warning("{}, continuing without persisting", msg)


class MemoryStore:
    """In-process store. Values are kept as JSON text so callers never share objects."""

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            if self.strict:
                msg = f"Value for {key!r} is not JSON-serializable"
                raise StorageFailure(msg) from e
            logger.opt(exception=e).warning("Failed to persist {}, continuing", key)
            return
        with self._lock:
            self._data[key] = payload

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        with self._lock:
            return sorted(k for k in self._data if k.startswith(prefix))
