"""Get command implementation."""

from __future__ import annotations

from dataclasses import dataclass

import typer
from rich.console import Console
from rich.markup import escape

from pda.commands.base import CommandContext, SyncCommand
from pda.errors import PdaError, SecretValueError
from pda.formatting import OMITTED_BINARY, is_utf8, stdout_is_tty
from pda.store import Entry, Store


@dataclass
class GetOptions:
    """Options for get command."""

    ref: str
    include_binary: bool = False
    include_secret: bool = False


@dataclass
class GetResult:
    """Result of get command."""

    ref: str
    entry: Entry


class GetCommand(SyncCommand[GetResult]):
    """Read a single value."""

    def __init__(self, context: CommandContext, options: GetOptions) -> None:
        super().__init__(context)
        self.options = options

    def execute(self) -> GetResult:
        entry = self.store.get(self.options.ref)
        if entry.secret and not self.options.include_secret:
            raise SecretValueError(
                f'"{self.options.ref}" is marked secret; re-run with --include-secret to display it'
            )
        return GetResult(ref=self.options.ref, entry=entry)


def get_value(
    store: Store,
    ref: str,
    *,
    include_binary: bool = False,
    include_secret: bool = False,
) -> GetResult:
    """Convenience function to read a value.

    Raises:
        KeyNotFoundError: If the key does not exist.
        SecretValueError: If the value is secret and not requested.
    """
    context = CommandContext(store=store)
    options = GetOptions(ref=ref, include_binary=include_binary, include_secret=include_secret)
    return GetCommand(context, options).execute()


def handle_get_command(
    store: Store,
    *,
    error_console: Console,
    ref: str,
    include_binary: bool = False,
    include_secret: bool = False,
) -> None:
    try:
        result = get_value(
            store, ref, include_binary=include_binary, include_secret=include_secret
        )
    except PdaError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1) from e

    tty = stdout_is_tty()
    value = result.entry.value
    if is_utf8(value):
        typer.echo(value.decode("utf-8"), nl=tty)
    elif tty and not include_binary:
        typer.echo(OMITTED_BINARY, nl=tty)
    else:
        typer.echo(value, nl=tty)
