"""Base command infrastructure."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

from pda.store import Store

TResult = TypeVar("TResult")


@dataclass
class CommandContext:
    """Context passed to all commands.

    Attributes:
        store: The store holding every named database.
    """

    store: Store


class SyncCommand(ABC, Generic[TResult]):
    """Base class for pda commands.

    Commands encapsulate the logic for a specific operation.
    They receive a context and return a result.
    """

    def __init__(self, context: CommandContext) -> None:
        """Initialize command.

        Args:
            context: Command context.
        """
        self.context = context
        self.store = context.store

    @abstractmethod
    def execute(self) -> TResult:
        """Execute the command.

        Returns:
            Command-specific result.
        """
        ...
