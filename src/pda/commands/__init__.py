"""pda commands."""

from pda.commands.base import CommandContext, SyncCommand
from pda.commands.delete import (
    DeleteCommand,
    DeleteDbCommand,
    DeleteDbResult,
    DeleteResult,
    handle_delete_command,
    handle_delete_db_command,
)
from pda.commands.dump import (
    DumpCommand,
    DumpEncoding,
    DumpEntry,
    DumpOptions,
    dump,
    encode_entry,
    handle_dump_command,
)
from pda.commands.get import GetCommand, GetOptions, GetResult, get_value, handle_get_command
from pda.commands.list import (
    SECRET_PLACEHOLDER,
    ListCommand,
    ListOptions,
    ListResult,
    handle_list_command,
    list_entries,
)
from pda.commands.restore import (
    RestoreCommand,
    RestoreResult,
    decode_value,
    handle_restore_command,
    restore,
)
from pda.commands.set import SetCommand, SetOptions, SetResult, handle_set_command, set_value

__all__ = [
    # Base
    "CommandContext",
    "SyncCommand",
    # Get
    "GetCommand",
    "GetOptions",
    "GetResult",
    "get_value",
    "handle_get_command",
    # Set
    "SetCommand",
    "SetOptions",
    "SetResult",
    "set_value",
    "handle_set_command",
    # Delete
    "DeleteCommand",
    "DeleteResult",
    "DeleteDbCommand",
    "DeleteDbResult",
    "handle_delete_command",
    "handle_delete_db_command",
    # List
    "SECRET_PLACEHOLDER",
    "ListCommand",
    "ListOptions",
    "ListResult",
    "list_entries",
    "handle_list_command",
    # Dump
    "DumpCommand",
    "DumpEncoding",
    "DumpEntry",
    "DumpOptions",
    "dump",
    "encode_entry",
    "handle_dump_command",
    # Restore
    "RestoreCommand",
    "RestoreResult",
    "decode_value",
    "restore",
    "handle_restore_command",
]
