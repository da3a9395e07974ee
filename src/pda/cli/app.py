"""pda CLI application."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from pda.commands import (
    handle_delete_command,
    handle_delete_db_command,
    handle_dump_command,
    handle_get_command,
    handle_list_command,
    handle_restore_command,
    handle_set_command,
)
from pda.config import PdaConfig, load_config
from pda.errors import PdaError
from pda.formatting import parse_duration
from pda.log import configure_logging
from pda.store import Store


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from pda import __version__

        print(f"pda {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="pda",
    help="Key-value store for the command line",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def _app_callback(
    version: Annotated[  # noqa: ARG001
        bool,
        typer.Option("--version", "-V", help="Show version and exit", callback=version_callback),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase log verbosity"),
    ] = 0,
) -> None:
    """Key-value store for the command line."""
    configure_logging(verbose)


error_console = Console(stderr=True)


def get_config() -> PdaConfig:
    """Load the configuration file, exiting on errors."""
    try:
        return load_config()
    except PdaError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1) from e


def get_store(config: PdaConfig | None = None) -> Store:
    """Open the store described by the configuration."""
    return Store.from_config(config or get_config())


def parse_ttl(value: str | None) -> timedelta | None:
    if value is None:
        return None
    try:
        return parse_duration(value)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="'--ttl'") from e


@app.command()
def get(
    key: Annotated[str, typer.Argument(help="KEY[@DB]")],
    include_binary: Annotated[
        bool,
        typer.Option("--include-binary", "-b", help="Include binary data in text output"),
    ] = False,
    include_secret: Annotated[
        bool,
        typer.Option("--include-secret", help="Display values marked as secret"),
    ] = False,
) -> None:
    """Get a value for a key. Optionally specify a db."""
    handle_get_command(
        get_store(),
        error_console=error_console,
        ref=key,
        include_binary=include_binary,
        include_secret=include_secret,
    )


@app.command("set")
def set_cmd(
    key: Annotated[str, typer.Argument(help="KEY[@DB]")],
    value: Annotated[
        str | None,
        typer.Argument(help="Value to store; read from stdin when omitted"),
    ] = None,
    secret: Annotated[
        bool,
        typer.Option("--secret", help="Mark the stored value as a secret"),
    ] = False,
    ttl: Annotated[
        str | None,
        typer.Option("--ttl", help="Expire the key after a duration (90s, 10m, 1h30m, 2d)"),
    ] = None,
) -> None:
    """Set a value for a key by passing VALUE or from stdin."""
    expiry = parse_ttl(ttl)
    handle_set_command(
        get_store(),
        error_console=error_console,
        ref=key,
        value=value,
        secret=secret,
        ttl=expiry,
    )


@app.command("del")
def del_cmd(
    key: Annotated[str, typer.Argument(help="KEY[@DB]")],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Delete without confirmation"),
    ] = False,
) -> None:
    """Delete a key. Optionally specify a db."""
    handle_delete_command(get_store(), error_console=error_console, ref=key, force=force)


@app.command("delete-db")
def delete_db(
    db: Annotated[str, typer.Argument(help="Database name")],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Delete without confirmation"),
    ] = False,
) -> None:
    """Delete a database."""
    handle_delete_db_command(get_store(), error_console=error_console, name=db, force=force)


@app.command("list")
def list_cmd(
    db: Annotated[str | None, typer.Argument(help="Database to list")] = None,
    binary: Annotated[
        bool,
        typer.Option("--binary", "-b", help="Include binary data in text output"),
    ] = False,
    secret: Annotated[
        bool,
        typer.Option("--secret", "-S", help="Display values marked as secret"),
    ] = False,
    no_keys: Annotated[
        bool,
        typer.Option("--no-keys", help="Suppress the key column"),
    ] = False,
    no_values: Annotated[
        bool,
        typer.Option("--no-values", help="Suppress the value column"),
    ] = False,
    ttl: Annotated[
        bool,
        typer.Option("--ttl", "-t", help="Append a TTL column"),
    ] = False,
    no_header: Annotated[
        bool,
        typer.Option("--no-header", help="Omit the header row"),
    ] = False,
    fmt: Annotated[
        str | None,
        typer.Option("--format", "-f", help="table, csv, html or markdown"),
    ] = None,
    style: Annotated[
        str | None,
        typer.Option("--style", help="Table style: rounded, square, ascii, simple, plain"),
    ] = None,
) -> None:
    """List the contents of a db."""
    config = get_config()
    defaults = config.list

    handle_list_command(
        get_store(config),
        error_console=error_console,
        db=db,
        format=fmt or defaults.format,
        style=style or defaults.style,
        header=defaults.header and not no_header,
        key=not no_keys,
        value=not no_values,
        ttl=ttl or defaults.ttl,
        binary=binary,
        secrets=secret,
    )


@app.command("dump")
def dump_cmd(
    db: Annotated[str | None, typer.Argument(help="Database to dump")] = None,
    encoding: Annotated[
        str,
        typer.Option("--encoding", "-e", help="Value encoding: auto, base64 or text"),
    ] = "auto",
    secret: Annotated[
        bool,
        typer.Option("--secret", help="Include entries marked as secret"),
    ] = False,
) -> None:
    """Dump all key/value pairs as NDJSON."""
    handle_dump_command(
        get_store(),
        error_console=error_console,
        db=db,
        encoding=encoding,
        include_secret=secret,
    )


@app.command("restore")
def restore_cmd(
    db: Annotated[str | None, typer.Argument(help="Database to restore into")] = None,
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Path to an NDJSON dump (defaults to stdin)"),
    ] = None,
) -> None:
    """Restore key/value pairs from an NDJSON dump."""
    handle_restore_command(get_store(), error_console=error_console, db=db, file=file)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
