"""Dump command implementation.

Entries are written as NDJSON, one object per line::

    {"key":"name","value":"alice","encoding":"text"}
    {"key":"blob","value":"AAEC","encoding":"base64","secret":true}
"""

from __future__ import annotations

import base64
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape

from pda.commands.base import CommandContext, SyncCommand
from pda.errors import EncodingError, InvalidFormatError, PdaError, StoreNotFoundError
from pda.formatting import is_utf8
from pda.store import Entry, Store, parse_db


class DumpEncoding(Enum):
    """How values are encoded in a dump."""

    AUTO = "auto"
    BASE64 = "base64"
    TEXT = "text"

    @classmethod
    def parse(cls, value: str) -> DumpEncoding:
        try:
            return cls(value)
        except ValueError:
            raise InvalidFormatError(f'unsupported encoding "{value}"') from None


class DumpEntry(BaseModel):
    """One NDJSON record of a dump."""

    key: str
    value: str
    encoding: str | None = None
    secret: bool = False
    expires_at: int = 0

    def to_json(self) -> str:
        return self.model_dump_json(exclude_defaults=True)


def encode_entry(entry: Entry, encoding: DumpEncoding) -> DumpEntry:
    """Convert a stored entry into a dump record.

    Raises:
        EncodingError: If ``TEXT`` is requested for a non UTF-8 value.
    """
    record = DumpEntry(
        key=entry.key,
        value="",
        secret=entry.secret,
        expires_at=entry.expires_at,
    )
    if encoding is DumpEncoding.BASE64 or (
        encoding is DumpEncoding.AUTO and not is_utf8(entry.value)
    ):
        record.value = base64.b64encode(entry.value).decode("ascii")
        record.encoding = "base64"
        return record
    if not is_utf8(entry.value):
        raise EncodingError(
            f'key "{entry.key}" contains non-UTF8 data; use --encoding=auto or base64'
        )
    record.value = entry.value.decode("utf-8")
    record.encoding = "text"
    return record


@dataclass
class DumpOptions:
    """Options for dump command."""

    db: str | None = None
    encoding: DumpEncoding = DumpEncoding.AUTO
    include_secret: bool = False


class DumpCommand(SyncCommand[Iterator[DumpEntry]]):
    """Stream every entry of a database as dump records."""

    def __init__(self, context: CommandContext, options: DumpOptions | None = None) -> None:
        super().__init__(context)
        self.options = options or DumpOptions()

    def resolve_db(self) -> str:
        if self.options.db is None:
            return self.store.default_db
        name = parse_db(self.options.db)
        if not self.store.exists(name):
            raise StoreNotFoundError(self.options.db)
        return name

    def execute(self) -> Iterator[DumpEntry]:
        db = self.resolve_db()
        return self._records(db)

    def _records(self, db: str) -> Iterator[DumpEntry]:
        for entry in self.store.iter_entries(db):
            if entry.secret and not self.options.include_secret:
                continue
            yield encode_entry(entry, self.options.encoding)


def dump(
    store: Store,
    *,
    db: str | None = None,
    encoding: DumpEncoding = DumpEncoding.AUTO,
    include_secret: bool = False,
) -> Iterator[DumpEntry]:
    """Convenience function to dump a database.

    The database is resolved eagerly; records are produced lazily.
    """
    context = CommandContext(store=store)
    options = DumpOptions(db=db, encoding=encoding, include_secret=include_secret)
    return DumpCommand(context, options).execute()


def handle_dump_command(
    store: Store,
    *,
    error_console: Console,
    db: str | None = None,
    encoding: str = "auto",
    include_secret: bool = False,
) -> None:
    try:
        records = dump(
            store,
            db=db,
            encoding=DumpEncoding.parse(encoding),
            include_secret=include_secret,
        )
        for record in records:
            typer.echo(record.to_json())
    except PdaError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1) from e
