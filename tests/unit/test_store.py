"""Tests for the key-value stores."""

import sqlite3
from pathlib import Path

import pytest

from travel_journal.core.storage.store import MemoryStore, SqliteStore
from travel_journal.errors import StorageFailure
from travel_journal.protocols import StoreProtocol


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request: pytest.FixtureRequest, tmp_path: Path) -> StoreProtocol:
    if request.param == "memory":
        return MemoryStore()
    return SqliteStore.connect(tmp_path / "journal.db")


def test_get_missing_key_returns_none(any_store: StoreProtocol) -> None:
    assert any_store.get("nothing") is None


def test_set_get_delete(any_store: StoreProtocol) -> None:
    value = {"tree": [], "pages": {"a": {"formatted_text": "<p>é</p>"}}, "selected_id": None}
    any_store.set("k", value)
    assert any_store.get("k") == value
    any_store.delete("k")
    assert any_store.get("k") is None
    any_store.delete("k")


def test_keys_filters_by_prefix(any_store: StoreProtocol) -> None:
    any_store.set("docs:b", 1)
    any_store.set("docs:a", 2)
    any_store.set("theme", "dark")
    assert any_store.keys("docs:") == ["docs:a", "docs:b"]


def test_stored_values_are_copies(any_store: StoreProtocol) -> None:
    value = {"items": [1]}
    any_store.set("k", value)
    value["items"].append(2)
    loaded = any_store.get("k")
    loaded["items"].append(3)
    assert any_store.get("k") == {"items": [1]}


def test_sqlite_store_persists_across_connections(tmp_path: Path) -> None:
    db = tmp_path / "journal.db"
    first = SqliteStore.connect(db)
    first.set("k", ["v"])
    first.close()
    assert SqliteStore.connect(db).get("k") == ["v"]


def test_unserializable_value_is_swallowed(any_store: StoreProtocol) -> None:
    any_store.set("k", {"bad": object()})
    assert any_store.get("k") is None


def test_strict_store_raises_storage_failure() -> None:
    with pytest.raises(StorageFailure):
        MemoryStore(strict=True).set("k", object())


def test_closed_database_failures_are_logged_not_raised() -> None:
    store = SqliteStore(sqlite3.connect(":memory:"))
    store.close()
    store.set("k", 1)
    assert store.get("k") is None
    assert store.keys() == []


def test_closed_database_failures_raise_when_strict() -> None:
    store = SqliteStore(sqlite3.connect(":memory:"), strict=True)
    store.close()
    with pytest.raises(StorageFailure):
        store.set("k", 1)
    with pytest.raises(StorageFailure):
        store.keys()


def test_undecodable_row_reads_as_missing() -> None:
    conn = sqlite3.connect(":memory:")
    store = SqliteStore(conn)
    conn.execute("INSERT INTO kv (key, value, updated_at) VALUES ('k', '{broken', 0)")
    assert store.get("k") is None


def test_stores_satisfy_protocol(tmp_path: Path) -> None:
    assert isinstance(MemoryStore(), StoreProtocol)
    assert isinstance(SqliteStore.connect(tmp_path / "x.db"), StoreProtocol)
