"""Named key-value databases stored below a common root directory."""

from __future__ import annotations

import os
import shutil
import sqlite3
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING

from pda.errors import KeyNotFoundError, StoreNotFoundError
from pda.log import get_logger
from pda.store.db import DB_FILENAME, open_connection
from pda.store.keys import DEFAULT_DB, KeyRef, parse_db, parse_key

if TYPE_CHECKING:
    from pda.config import PdaConfig

logger = get_logger(__name__)

STORE_DIR_ENV = "PDA_STORE_DIR"
META_SECRET = 0x1


@dataclass(frozen=True)
class Entry:
    """A stored key with its value and metadata.

    Attributes:
        key: Key name.
        value: Raw value bytes.
        secret: Whether the value is hidden unless explicitly requested.
        expires_at: Unix timestamp after which the entry is gone, 0 for never.
    """

    key: str
    value: bytes
    secret: bool = False
    expires_at: int = 0

    def is_expired(self, now: float | None = None) -> bool:
        if self.expires_at == 0:
            return False
        return self.expires_at <= (time.time() if now is None else now)


def resolve_store_root(config: PdaConfig | None = None) -> Path:
    """Resolve the store root from env override, config, or XDG data home."""
    override = os.getenv(STORE_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    if config is not None and config.store_dir is not None:
        return config.store_dir

    base = os.getenv("XDG_DATA_HOME", "").strip()
    data_home = Path(base).expanduser() if base else Path.home() / ".local" / "share"
    return data_home / "pda" / "stores"


class Store:
    """Access to every named database below ``root``."""

    def __init__(self, root: Path, default_db: str = DEFAULT_DB) -> None:
        self.root = root
        self.default_db = default_db

    @classmethod
    def from_config(cls, config: PdaConfig) -> Store:
        return cls(resolve_store_root(config), default_db=config.default_db)

    def path(self, *parts: str) -> Path:
        """Return a path below the store root, creating the root if needed."""
        self.root.mkdir(parents=True, exist_ok=True, mode=0o750)
        return self.root.joinpath(*parts)

    def parse(self, ref: str) -> KeyRef:
        return parse_key(ref, default_db=self.default_db)

    def all_stores(self) -> list[str]:
        """Names of every existing database, sorted."""
        return sorted(p.name for p in self.path().iterdir() if p.is_dir())

    def exists(self, name: str) -> bool:
        return self.path(name).is_dir()

    def find_store(self, name: str) -> Path:
        """Locate an existing database directory.

        Raises:
            KeyFormatError: If ``name`` is blank.
            StoreNotFoundError: If no such database exists.
        """
        db = parse_db(name)
        path = self.path(db)
        if not path.is_dir():
            raise StoreNotFoundError(name)
        return path

    def get(self, ref: str) -> Entry:
        """Fetch a live entry.

        Raises:
            KeyNotFoundError: If the key is missing or expired.
        """
        key_ref = self.parse(ref)
        db_dir = self.path(key_ref.db)
        if not (db_dir / DB_FILENAME).exists():
            raise KeyNotFoundError(str(key_ref))

        with open_connection(db_dir, readonly=True) as conn:
            row = conn.execute(
                "SELECT key, value, meta, expires_at FROM entries "
                "WHERE key = ? AND (expires_at = 0 OR expires_at > ?)",
                (key_ref.key, int(time.time())),
            ).fetchone()
        if row is None:
            raise KeyNotFoundError(str(key_ref))
        return _row_to_entry(row)

    def set(
        self,
        ref: str,
        value: bytes,
        *,
        secret: bool = False,
        ttl: timedelta | None = None,
    ) -> KeyRef:
        """Insert or replace a value."""
        key_ref = self.parse(ref)
        expires_at = int(time.time() + ttl.total_seconds()) if ttl else 0
        with open_connection(self.path(key_ref.db)) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO entries (key, value, meta, expires_at) VALUES (?, ?, ?, ?)",
                (key_ref.key, value, META_SECRET if secret else 0, expires_at),
            )
        logger.debug("set key", key=str(key_ref), secret=secret, expires_at=expires_at)
        return key_ref

    def delete(self, ref: str) -> bool:
        """Delete a key. Returns whether anything was removed."""
        key_ref = self.parse(ref)
        db_dir = self.path(key_ref.db)
        if not (db_dir / DB_FILENAME).exists():
            return False
        with open_connection(db_dir) as conn:
            cursor = conn.execute("DELETE FROM entries WHERE key = ?", (key_ref.key,))
        removed = cursor.rowcount > 0
        logger.debug("deleted key", key=str(key_ref), removed=removed)
        return removed

    def iter_entries(self, db: str | None = None) -> Iterator[Entry]:
        """Yield live entries of ``db`` in key order."""
        name = db or self.default_db
        db_dir = self.path(name)
        if not (db_dir / DB_FILENAME).exists():
            return

        with open_connection(db_dir, readonly=True) as conn:
            cursor = conn.execute(
                "SELECT key, value, meta, expires_at FROM entries "
                "WHERE expires_at = 0 OR expires_at > ? ORDER BY key",
                (int(time.time()),),
            )
            for row in cursor:
                yield _row_to_entry(row)

    def restore(self, db: str, entries: Iterable[Entry]) -> int:
        """Write ``entries`` into ``db`` in a single transaction.

        Nothing is written if iterating ``entries`` raises.

        Returns:
            Number of entries written.
        """
        count = 0
        with open_connection(self.path(db)) as conn:
            for entry in entries:
                conn.execute(
                    "INSERT OR REPLACE INTO entries (key, value, meta, expires_at) "
                    "VALUES (?, ?, ?, ?)",
                    (
                        entry.key,
                        entry.value,
                        META_SECRET if entry.secret else 0,
                        entry.expires_at,
                    ),
                )
                count += 1
        logger.info("restored entries", db=db, count=count)
        return count

    def delete_store(self, name: str) -> Path:
        """Remove a database directory and everything in it."""
        path = self.find_store(name)
        shutil.rmtree(path)
        logger.info("deleted database", path=str(path))
        return path


def _row_to_entry(row: sqlite3.Row) -> Entry:
    return Entry(
        key=row["key"],
        value=bytes(row["value"]),
        secret=bool(row["meta"] & META_SECRET),
        expires_at=row["expires_at"],
    )
