"""Parsing of ``KEY[@DB]`` and ``DB`` references."""

from __future__ import annotations

from dataclasses import dataclass

from pda.errors import KeyFormatError

DEFAULT_DB = "default"


@dataclass(frozen=True)
class KeyRef:
    """A parsed key reference.

    Attributes:
        key: Lower-cased key name.
        db: Lower-cased database name (empty when no default applied).
    """

    key: str
    db: str

    def __str__(self) -> str:
        return f"{self.key}@{self.db}" if self.db else self.key


def parse_key(ref: str, *, default_db: str | None = DEFAULT_DB) -> KeyRef:
    """Split ``KEY[@DB]`` into its parts.

    Args:
        ref: Raw reference from the command line.
        default_db: Database to use when ``@DB`` is omitted or empty.
            ``None`` leaves the database empty.

    Raises:
        KeyFormatError: If the reference contains more than one ``@``.
    """
    parts = ref.split("@")
    if len(parts) == 1:
        return KeyRef(key=parts[0].lower(), db=default_db or "")
    if len(parts) == 2:
        return KeyRef(key=parts[0].lower(), db=parts[1].lower() or default_db or "")
    raise KeyFormatError("bad key format, use KEY@DB")


def parse_db(value: str, *, default_db: str | None = None) -> str:
    """Normalize a ``DB`` or ``@DB`` reference.

    Raises:
        KeyFormatError: If the name is blank and no default is given.
    """
    db = value.strip()
    if db.startswith("@"):
        db = db[1:]
    if not db:
        if default_db:
            return default_db
        raise KeyFormatError("bad db format, use DB or @DB")
    return db.lower()
