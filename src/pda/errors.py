"""Exception hierarchy for pda."""

from __future__ import annotations


class PdaError(Exception):
    """Base class for all pda errors.

    Attributes:
        message: Human readable description shown to the user.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(PdaError):
    """Invalid or unreadable configuration file."""


class KeyFormatError(PdaError):
    """A KEY[@DB] or DB reference could not be parsed."""


class StoreNotFoundError(PdaError):
    """The requested database does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f'"{name}" does not exist')
        self.name = name


class KeyNotFoundError(PdaError):
    """The requested key does not exist (or has expired)."""

    def __init__(self, key: str) -> None:
        super().__init__(f'key "{key}" not found')
        self.key = key


class SecretValueError(PdaError):
    """A secret value was requested without opting in."""


class EncodingError(PdaError):
    """A value could not be encoded or decoded for dump/restore."""


class RestoreError(PdaError):
    """A dump line could not be restored.

    Attributes:
        line: 1-based line number of the offending record.
    """

    def __init__(self, line: int, reason: str) -> None:
        super().__init__(f"line {line}: {reason}")
        self.line = line


class NoColumnsSelectedError(PdaError):
    """Every list column was disabled."""

    def __init__(self) -> None:
        super().__init__("no columns selected; disable --no-keys/--no-values or pass --ttl")


class InvalidFormatError(PdaError):
    """Unsupported output format or encoding name."""
