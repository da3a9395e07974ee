"""Key-value storage backed by one SQLite file per named database."""

from pda.store.keys import DEFAULT_DB, KeyRef, parse_db, parse_key
from pda.store.store import Entry, Store, resolve_store_root

__all__ = [
    "DEFAULT_DB",
    "Entry",
    "KeyRef",
    "Store",
    "parse_db",
    "parse_key",
    "resolve_store_root",
]
