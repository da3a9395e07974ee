"""List command implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TextIO

import typer
from rich.console import Console
from rich.markup import escape

from pda.cli.output.layout import (
    ColumnKind,
    ContentWidths,
    WidthPlan,
    apply_column_constraints,
    select_columns,
)
from pda.cli.output.table import ListFormat, TableWriter, get_style
from pda.commands.base import CommandContext, SyncCommand
from pda.errors import PdaError, StoreNotFoundError
from pda.formatting import format_bytes, format_expiry
from pda.store import Entry, Store, parse_db

SECRET_PLACEHOLDER = "[secret: pass --secret to view]"


@dataclass
class ListOptions:
    """Options for list command."""

    db: str | None = None
    format: ListFormat = ListFormat.TABLE
    style: str = "rounded"
    header: bool = True
    key: bool = True
    value: bool = True
    ttl: bool = False
    binary: bool = False
    secrets: bool = False
    width: int | None = None


@dataclass
class ListResult:
    """Result of list command.

    The writer holds every buffered row; for table output it is already
    configured with ``plan``.
    """

    db: str
    columns: list[ColumnKind]
    writer: TableWriter
    content_widths: ContentWidths
    entries: int = 0
    plan: WidthPlan | None = field(default=None)


class ListCommand(SyncCommand[ListResult]):
    """List the entries of one database as a table."""

    def __init__(
        self,
        context: CommandContext,
        options: ListOptions | None = None,
        out: TextIO | None = None,
    ) -> None:
        super().__init__(context)
        self.options = options or ListOptions()
        self.out = out

    def resolve_db(self) -> str:
        """Database to list; an explicit name must already exist."""
        if self.options.db is None:
            return self.store.default_db
        name = parse_db(self.options.db)
        if not self.store.exists(name):
            raise StoreNotFoundError(self.options.db)
        return name

    def build_row(self, entry: Entry, columns: list[ColumnKind]) -> list[str]:
        opts = self.options
        cells: list[str] = []
        for column in columns:
            if column is ColumnKind.KEY:
                cells.append(entry.key)
            elif column is ColumnKind.VALUE:
                if entry.secret and not opts.secrets:
                    cells.append(SECRET_PLACEHOLDER)
                else:
                    cells.append(format_bytes(entry.value, include_binary=opts.binary))
            elif column is ColumnKind.TTL:
                cells.append(format_expiry(entry.expires_at))
        return cells

    def execute(self) -> ListResult:
        """Buffer every entry and plan column widths for table output.

        Raises:
            NoColumnsSelectedError: If every column is disabled.
            StoreNotFoundError: If an explicit database does not exist.
        """
        opts = self.options
        columns = select_columns(opts.key, opts.value, opts.ttl)
        db = self.resolve_db()

        writer = TableWriter(self.out, style=get_style(opts.style))
        widths = ContentWidths(len(columns))

        if opts.header:
            header = [c.label for c in columns]
            widths.observe(header)
            writer.append_header(header)

        count = 0
        for entry in self.store.iter_entries(db):
            row = self.build_row(entry, columns)
            widths.observe(row)
            writer.append_row(row)
            count += 1

        plan = None
        if opts.format.is_tabular:
            plan = apply_column_constraints(writer, columns, widths, total_width=opts.width)

        return ListResult(
            db=db,
            columns=columns,
            writer=writer,
            content_widths=widths,
            entries=count,
            plan=plan,
        )


def list_entries(
    store: Store,
    *,
    db: str | None = None,
    format: ListFormat = ListFormat.TABLE,
    out: TextIO | None = None,
    style: str = "rounded",
    header: bool = True,
    key: bool = True,
    value: bool = True,
    ttl: bool = False,
    binary: bool = False,
    secrets: bool = False,
    width: int | None = None,
) -> ListResult:
    """Convenience function to list and render a database.

    Args:
        store: Store to read from.
        db: Database name; the store default when omitted.
        format: Output format.
        out: Output stream, stdout when omitted.
        style, header, key, value, ttl, binary, secrets, width: See
            :class:`ListOptions`.

    Returns:
        List result after rendering.
    """
    context = CommandContext(store=store)
    list_options = ListOptions(
        db=db,
        format=format,
        style=style,
        header=header,
        key=key,
        value=value,
        ttl=ttl,
        binary=binary,
        secrets=secrets,
        width=width,
    )
    result = ListCommand(context, list_options, out=out).execute()
    result.writer.render(format)
    return result


def handle_list_command(
    store: Store,
    *,
    error_console: Console,
    db: str | None = None,
    format: str = "table",
    style: str = "rounded",
    header: bool = True,
    key: bool = True,
    value: bool = True,
    ttl: bool = False,
    binary: bool = False,
    secrets: bool = False,
) -> None:
    try:
        list_entries(
            store,
            db=db,
            format=ListFormat.parse(format),
            style=style,
            header=header,
            key=key,
            value=value,
            ttl=ttl,
            binary=binary,
            secrets=secrets,
        )
    except PdaError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1) from e
