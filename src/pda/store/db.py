"""SQLite connection management for a single database directory."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pda.log import get_logger

logger = get_logger(__name__)

DB_FILENAME = "store.db"
DEFAULT_BUSY_TIMEOUT_MS = 5000

_SCHEMA = """
CREATE TABLE IF NOT EXISTS entries (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL,
    meta INTEGER NOT NULL DEFAULT 0,
    expires_at INTEGER NOT NULL DEFAULT 0
) WITHOUT ROWID
"""


def apply_schema(conn: sqlite3.Connection) -> None:
    """Create the entries table if it is missing."""
    conn.execute(_SCHEMA)


@contextmanager
def open_connection(
    db_dir: Path,
    *,
    readonly: bool = False,
    busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS,
) -> Iterator[sqlite3.Connection]:
    """Open the database in ``db_dir`` as a single transaction.

    The transaction commits when the block exits normally and rolls back
    when it raises. Read-only connections never commit.
    """
    db_dir.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_dir / DB_FILENAME)
    try:
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute(f"PRAGMA busy_timeout = {busy_timeout_ms}")
        apply_schema(conn)
        conn.commit()
        logger.debug("opened database", path=str(db_dir), readonly=readonly)

        yield conn

        if readonly:
            conn.rollback()
        else:
            conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()
