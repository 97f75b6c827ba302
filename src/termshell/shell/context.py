"""
Per-invocation command context.

Each command run gets a fresh SubShell that proxies I/O to the owning shell
and becomes permanently unusable once the command finishes.
"""

from typing import TYPE_CHECKING

from termshell.shell.errors import ContextDestroyedError
from termshell.shell.stream import RawInputStream
from termshell.shell.styles import stylize

if TYPE_CHECKING:
    from termshell.shell.session import Shell


class SubShell:
    """
    Lifetime-scoped facade over a Shell, handed to a single command call.

    Every operation fails with ContextDestroyedError after destroy().
    Raw input streams opened through the context are closed on destroy,
    which hands terminal input back to the line editor.
    """

    def __init__(self, shell: "Shell") -> None:
        self._shell = shell
        self._destroyed = False
        self._streams: list[RawInputStream] = []

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def _check_destroyed(self) -> None:
        if self._destroyed:
            raise ContextDestroyedError()

    # Output

    def print(self, message: str) -> None:
        self._check_destroyed()
        self._shell.print(message)

    def print_line(self, message: str = "") -> None:
        self._check_destroyed()
        self._shell.print_line(message)

    def print_list(self, items: list[str]) -> None:
        self._check_destroyed()
        self._shell.print_list(items)

    def clear(self) -> None:
        self._check_destroyed()
        self._shell.clear()

    def style(self, text: str, spec: str) -> str:
        self._check_destroyed()
        return stylize(text, spec)

    # Input

    async def read_char(self, prompt: str = "") -> str:
        self._check_destroyed()
        self._release_streams()
        return await self._shell.read_char(prompt)

    async def read_line(self, prompt: str = "") -> str:
        """Read a line, first handing raw input back to the line editor."""
        self._check_destroyed()
        self._release_streams()
        return await self._shell.read_line(prompt)

    def abort_read(self, reason: str = "") -> None:
        self._check_destroyed()
        self._shell.abort_read(reason)

    def _release_streams(self) -> None:
        # A command reading through the editor is done with its open streams
        for stream in self._streams:
            if stream.active:
                stream.close()

    def read_stream(self) -> RawInputStream:
        """
        Get a stream of raw terminal input for this command.

        Iterating the stream detaches the shell's line editor until the
        stream ends or is closed, the command reads through the line editor,
        or this context is destroyed.
        """
        self._check_destroyed()
        stream = RawInputStream(self._shell, lambda: self._destroyed)
        self._streams.append(stream)
        return stream

    # Shell state

    @property
    def commands(self) -> list[str]:
        self._check_destroyed()
        return self._shell.registry.names()

    @property
    def environment(self) -> dict[str, str]:
        """The shell's environment, shared with every other command."""
        self._check_destroyed()
        return self._shell.environment

    @property
    def columns(self) -> int:
        self._check_destroyed()
        return self._shell.columns

    @property
    def rows(self) -> int:
        self._check_destroyed()
        return self._shell.rows

    def destroy(self) -> None:
        """Mark the context unusable and close its raw input streams."""
        if self._destroyed:
            return
        self._destroyed = True
        for stream in self._streams:
            stream.close()
        self._streams.clear()
