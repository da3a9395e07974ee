"""Delete commands: single keys and whole databases."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from pda.commands.base import CommandContext, SyncCommand
from pda.errors import PdaError
from pda.store import Store


@dataclass
class DeleteResult:
    """Result of delete command."""

    target: str
    removed: bool


class DeleteCommand(SyncCommand[DeleteResult]):
    """Delete a single key."""

    def __init__(self, context: CommandContext, ref: str) -> None:
        super().__init__(context)
        self.ref = ref

    def prompt_target(self) -> str:
        """The key as shown in confirmation messages, always with its db."""
        key_ref = self.store.parse(self.ref)
        key, _, db = self.ref.partition("@")
        return f"{key}@{db or key_ref.db}"

    def execute(self) -> DeleteResult:
        return DeleteResult(target=self.prompt_target(), removed=self.store.delete(self.ref))


@dataclass
class DeleteDbResult:
    """Result of delete-db command."""

    path: Path

    @property
    def display_path(self) -> str:
        return display_path(self.path)


class DeleteDbCommand(SyncCommand[DeleteDbResult]):
    """Delete a database directory."""

    def __init__(self, context: CommandContext, name: str) -> None:
        super().__init__(context)
        self.name = name

    def locate(self) -> Path:
        return self.store.find_store(self.name)

    def execute(self) -> DeleteDbResult:
        return DeleteDbResult(path=self.store.delete_store(self.name))


def display_path(path: Path) -> str:
    """Abbreviate the home directory as ``~``."""
    try:
        return str(Path("~") / path.relative_to(Path.home()))
    except (RuntimeError, ValueError):
        return str(path)


def handle_delete_command(
    store: Store,
    *,
    error_console: Console,
    ref: str,
    force: bool = False,
) -> None:
    try:
        cmd = DeleteCommand(CommandContext(store=store), ref)
        target = cmd.prompt_target()
        if not force and not typer.confirm(f'Are you sure you want to delete "{target}"?'):
            error_console.print(f'Did not delete "{escape(target)}"')
            return
        cmd.execute()
    except PdaError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1) from e


def handle_delete_db_command(
    store: Store,
    *,
    error_console: Console,
    name: str,
    force: bool = False,
) -> None:
    try:
        cmd = DeleteDbCommand(CommandContext(store=store), name)
        nice = display_path(cmd.locate())
        if not force and not typer.confirm(f'Are you sure you want to delete "{nice}"?'):
            error_console.print(f'Did not delete "{escape(nice)}"')
            return
        result = cmd.execute()
    except PdaError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1) from e

    error_console.print(f'Deleted "{escape(result.display_path)}"')
