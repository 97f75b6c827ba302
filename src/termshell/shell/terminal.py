"""Abstract interfaces for the line editor and terminal the shell runs on."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Optional

AutocompleteHandler = Callable[[int, list[str]], list[str]]


class Disposable(ABC):
    """Handle for a subscription that can be released."""

    @abstractmethod
    def dispose(self) -> None:
        """Release the subscription. Calling it again has no effect."""
        pass


class TerminalSurface(ABC):
    """Raw terminal: writes text and emits raw input chunks."""

    @abstractmethod
    def write(self, text: str) -> None:
        """Write text to the terminal as-is."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear the terminal screen."""
        pass

    @abstractmethod
    def on_data(
        self,
        callback: Callable[[str], None],
        on_end: Optional[Callable[[], None]] = None,
    ) -> Disposable:
        """
        Subscribe to raw input chunks.

        Args:
            callback: Called with each raw input chunk.
            on_end: Called once if the terminal disposes the input source
                itself (e.g., the terminal is torn down).

        Returns:
            Handle that unsubscribes when disposed.
        """
        pass

    @property
    @abstractmethod
    def cols(self) -> int:
        """Terminal width in columns."""
        pass

    @property
    @abstractmethod
    def rows(self) -> int:
        """Terminal height in rows."""
        pass


class LineEditor(ABC):
    """Line editing and echo engine used for prompted reads and printing."""

    @abstractmethod
    def attach(self) -> None:
        """Take ownership of raw key events for line editing."""
        pass

    @abstractmethod
    def detach(self) -> None:
        """Release raw key events to someone else."""
        pass

    @abstractmethod
    async def read(self, prompt: str) -> str:
        """
        Read one line of input.

        Raises:
            ReadAbortedError: If abort_read() is called while waiting.
            EOFError: When input is exhausted (e.g., Ctrl+D).
        """
        pass

    @abstractmethod
    async def read_char(self, prompt: str) -> str:
        """Read a single character of input."""
        pass

    @abstractmethod
    def abort_read(self, reason: str = "") -> None:
        """Cancel a pending read, which then raises ReadAbortedError."""
        pass

    @abstractmethod
    def println(self, message: str) -> None:
        """Print a line of text."""
        pass

    @abstractmethod
    def print_wide(self, items: list[str]) -> None:
        """Print items laid out in columns."""
        pass

    @abstractmethod
    def add_autocomplete_handler(self, handler: AutocompleteHandler) -> None:
        """Register a completion source called with (index, tokens)."""
        pass
