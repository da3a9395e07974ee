"""Set command implementation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

import typer
from rich.console import Console
from rich.markup import escape

from pda.commands.base import CommandContext, SyncCommand
from pda.errors import PdaError
from pda.store import KeyRef, Store


@dataclass
class SetOptions:
    """Options for set command."""

    ref: str
    value: bytes
    secret: bool = False
    ttl: timedelta | None = None


@dataclass
class SetResult:
    """Result of set command."""

    key: KeyRef


class SetCommand(SyncCommand[SetResult]):
    """Store a value under a key."""

    def __init__(self, context: CommandContext, options: SetOptions) -> None:
        super().__init__(context)
        self.options = options

    def execute(self) -> SetResult:
        key = self.store.set(
            self.options.ref,
            self.options.value,
            secret=self.options.secret,
            ttl=self.options.ttl,
        )
        return SetResult(key=key)


def set_value(
    store: Store,
    ref: str,
    value: bytes,
    *,
    secret: bool = False,
    ttl: timedelta | None = None,
) -> SetResult:
    """Convenience function to store a value."""
    context = CommandContext(store=store)
    options = SetOptions(ref=ref, value=value, secret=secret, ttl=ttl)
    return SetCommand(context, options).execute()


def handle_set_command(
    store: Store,
    *,
    error_console: Console,
    ref: str,
    value: str | None = None,
    secret: bool = False,
    ttl: timedelta | None = None,
) -> None:
    """Store ``value``, reading it from stdin when not given."""
    try:
        if value is not None:
            data = value.encode("utf-8")
        else:
            data = typer.get_binary_stream("stdin").read()
        set_value(store, ref, data, secret=secret, ttl=ttl)
    except PdaError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1) from e
