"""Restore command implementation."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from pda.commands.base import CommandContext, SyncCommand
from pda.commands.dump import DumpEntry
from pda.errors import EncodingError, PdaError, RestoreError
from pda.log import get_logger
from pda.store import Entry, Store, parse_db

logger = get_logger(__name__)


def decode_value(record: DumpEntry) -> bytes:
    """Decode a record's value according to its encoding.

    Raises:
        EncodingError: On an unknown encoding or invalid base64.
    """
    if record.encoding in (None, "", "text"):
        return record.value.encode("utf-8")
    if record.encoding == "base64":
        try:
            return base64.b64decode(record.value, validate=True)
        except binascii.Error as e:
            raise EncodingError(f"invalid base64 value: {e}") from e
    raise EncodingError(f'unsupported encoding "{record.encoding}"')


def parse_line(line: str, line_no: int) -> Entry:
    """Turn one NDJSON line into an entry.

    Raises:
        RestoreError: If the line is not a valid record.
    """
    try:
        record = DumpEntry.model_validate_json(line)
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(p) for p in first["loc"])
        reason = f"{where}: {first['msg']}" if where else first["msg"]
        raise RestoreError(line_no, reason) from e
    if not record.key:
        raise RestoreError(line_no, "missing key")
    try:
        value = decode_value(record)
    except EncodingError as e:
        raise RestoreError(line_no, e.message) from e
    return Entry(
        key=record.key,
        value=value,
        secret=record.secret,
        expires_at=record.expires_at,
    )


@dataclass
class RestoreResult:
    """Result of restore command."""

    db: str
    restored: int


class RestoreCommand(SyncCommand[RestoreResult]):
    """Load NDJSON records into a database in one transaction."""

    def __init__(
        self, context: CommandContext, lines: Iterable[str], db: str | None = None
    ) -> None:
        super().__init__(context)
        self.lines = lines
        self.db = parse_db(db) if db is not None else self.store.default_db

    def entries(self) -> Iterator[Entry]:
        for line_no, raw in enumerate(self.lines, start=1):
            line = raw.strip()
            if not line:
                continue
            yield parse_line(line, line_no)

    def execute(self) -> RestoreResult:
        logger.debug("restoring dump", db=self.db)
        restored = self.store.restore(self.db, self.entries())
        return RestoreResult(db=self.db, restored=restored)


def restore(store: Store, lines: Iterable[str], *, db: str | None = None) -> RestoreResult:
    """Convenience function to restore a dump.

    Raises:
        RestoreError: If any line is invalid. Nothing is written in that case.
    """
    context = CommandContext(store=store)
    return RestoreCommand(context, lines, db=db).execute()


def handle_restore_command(
    store: Store,
    *,
    error_console: Console,
    db: str | None = None,
    file: Path | None = None,
) -> None:
    try:
        if file is not None:
            try:
                with file.open(encoding="utf-8") as f:
                    result = restore(store, f, db=db)
            except OSError as e:
                raise PdaError(f"cannot read {file}: {e.strerror}") from e
        else:
            result = restore(store, typer.get_text_stream("stdin"), db=db)
    except PdaError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1) from e

    error_console.print(f"Restored {result.restored} entries into @{escape(result.db)}")
