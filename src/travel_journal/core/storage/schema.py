"""SQLite schema creation and migration for the journal store."""

import sqlite3

from loguru import logger

from travel_journal.errors import StorageFailure

SCHEMA_VERSION = 1

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the kv and metadata tables, stamping the current version on a new database."""
    conn.executescript(_SCHEMA_SQL)
    conn.execute(
        "INSERT OR IGNORE INTO metadata (key, value) VALUES ('schema_version', ?)",
        (str(SCHEMA_VERSION),),
    )
    conn.commit()


def get_schema_version(conn: sqlite3.Connection) -> int | None:
    """Return the stored schema version, or None for a database without one."""
    try:
        row = conn.execute("SELECT value FROM metadata WHERE key = 'schema_version'").fetchone()
    except sqlite3.OperationalError:
        return None
    return int(row[0]) if row else None


def migrate_schema(conn: sqlite3.Connection) -> None:
    """Bring the database to SCHEMA_VERSION.

    A database stamped with a newer version was written by a newer release
    whose documents this one may not understand, so it is refused rather than
    rewritten.
    """
    version = get_schema_version(conn)
    if version is not None and version > SCHEMA_VERSION:
        msg = f"Journal database has schema version {version}, this release supports up to {SCHEMA_VERSION}"
        raise StorageFailure(msg)
    if version is None:
        logger.debug("Creating journal schema v{}", SCHEMA_VERSION)
    # Tables are created idempotently, which also repairs a database missing kv.
    create_schema(conn)
