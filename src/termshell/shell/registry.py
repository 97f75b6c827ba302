"""
Command registry module for termshell.

Holds the name -> handler (+ optional autocomplete provider) bindings of a
shell. Pure storage and lookup; no handler is executed here.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from termshell.shell.errors import CommandAlreadyRegistered

if TYPE_CHECKING:
    from termshell.shell.context import SubShell

logger = logging.getLogger(__name__)

# A command receives its invocation context, positional args and parsed flags.
# It may return a plain value, an awaitable, or a (sync or async) iterator of
# output chunks.
Command = Callable[["SubShell", list[str], dict[str, Any]], Any]

# Autocomplete provider: (index, args) -> candidates for that argument position.
AutocompleteProvider = Callable[[int, list[str]], list[str]]


@dataclass(frozen=True)
class CommandEntry:
    """
    A registered command.

    Attributes:
        name: Command name, unique within a shell.
        handler: Callable invoked with (context, args, flags).
        autocomplete: Optional completion provider for the command's arguments.
    """

    name: str
    handler: Command
    autocomplete: Optional[AutocompleteProvider] = None


class CommandRegistry:
    """
    Registry of shell commands in registration order.

    Re-registering a name replaces the earlier entry and logs a warning;
    last write wins.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._entries: dict[str, CommandEntry] = {}

    def register(
        self,
        name: str,
        handler: Command,
        autocomplete: Optional[AutocompleteProvider] = None,
    ) -> "CommandRegistry":
        """
        Bind a command name to a handler.

        Args:
            name: Non-empty command name.
            handler: Function to run the command.
            autocomplete: Optional argument completion provider.

        Returns:
            The registry, for chaining.

        Raises:
            ValueError: If the name is empty.
        """
        if not name:
            raise ValueError("Command name must be a non-empty string")

        if name in self._entries:
            logger.warning(str(CommandAlreadyRegistered(name)))

        self._entries[name] = CommandEntry(
            name=name,
            handler=handler,
            autocomplete=autocomplete,
        )
        return self

    def has(self, name: str) -> bool:
        """Check whether a command name is registered."""
        return name in self._entries

    def get(self, name: str) -> Optional[CommandEntry]:
        """Get the entry for a command name, or None."""
        return self._entries.get(name)

    def names(self) -> list[str]:
        """Get registered command names in registration order."""
        return list(self._entries)

    def clear(self) -> None:
        """Remove every registered command."""
        self._entries.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
