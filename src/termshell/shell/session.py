"""
Shell session module for termshell.

Provides the long-lived Shell that owns the command registry and the
environment, runs the read-eval-print loop, and mediates terminal input
between the line editor and commands that need raw keystrokes.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Optional, Union

from termshell.shell.completer import resolve_completions
from termshell.shell.context import SubShell
from termshell.shell.errors import CommandNotFoundError, InputBusyError
from termshell.shell.parser import parse_command
from termshell.shell.registry import AutocompleteProvider, Command, CommandRegistry
from termshell.shell.results import classify_result, drain
from termshell.shell.styles import stylize
from termshell.shell.terminal import LineEditor, TerminalSurface

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "$ "

PromptProvider = Callable[[], Union[str, Awaitable[str]]]


class Shell:
    """
    Interactive shell session on top of a line editor and a terminal.

    Commands run strictly one at a time. Each run gets a fresh SubShell that
    is destroyed when the command finishes, whatever the outcome.

    Attributes:
        registry: Registered commands.
        environment: Variables shared by every command of the session.
        echo: Line editor used for prompted reads and printing.
        terminal: Raw terminal surface.
        prompt: Callable returning the prompt string (or an awaitable of it).
    """

    def __init__(
        self,
        echo: LineEditor,
        terminal: TerminalSurface,
        prompt: Union[str, PromptProvider, None] = None,
        environment: Optional[dict[str, str]] = None,
    ) -> None:
        """
        Initialize the shell and hook command completion into the editor.

        Args:
            echo: Line editor for reads and printing.
            terminal: Terminal surface for raw writes and raw input.
            prompt: Fixed prompt text or a prompt provider. Defaults to "$ ".
            environment: Initial environment; used by reference.
        """
        self.registry = CommandRegistry()
        self.environment: dict[str, str] = environment if environment is not None else {}
        self.echo = echo
        self.terminal = terminal
        self.prompt: PromptProvider = self._as_prompt_provider(prompt)

        self._attached = True
        self._input_owner: Optional[object] = None
        self._running = False

        self.echo.add_autocomplete_handler(self.auto_complete_commands)

    @staticmethod
    def _as_prompt_provider(prompt: Union[str, PromptProvider, None]) -> PromptProvider:
        if prompt is None:
            return lambda: DEFAULT_PROMPT
        if isinstance(prompt, str):
            return lambda: prompt
        return prompt

    # Attachment

    @property
    def attached(self) -> bool:
        """True while the line editor owns raw key events."""
        return self._attached

    def detach(self) -> None:
        """Detach the line editor from the terminal."""
        if not self._attached:
            return
        self.echo.detach()
        self._attached = False

    def attach(self) -> None:
        """Attach the line editor to the terminal."""
        if self._attached:
            return
        self.echo.attach()
        self._attached = True

    def claim_input(self, owner: object) -> None:
        """
        Give raw terminal input to a stream, detaching the line editor.

        Raises:
            InputBusyError: If another stream already holds terminal input.
        """
        if self._input_owner is not None:
            raise InputBusyError()
        self._input_owner = owner
        self.detach()

    def release_input(self, owner: object) -> None:
        """Return raw terminal input to the line editor."""
        if self._input_owner is not owner:
            return
        self._input_owner = None
        self.attach()

    # Registration

    def register(
        self,
        name: str,
        handler: Command,
        autocomplete: Optional[AutocompleteProvider] = None,
    ) -> "Shell":
        """
        Add a command to the shell.

        Re-registering a name logs a warning and replaces the old handler.

        Returns:
            Self for chaining.
        """
        self.registry.register(name, handler, autocomplete)
        return self

    command = register

    @property
    def commands(self) -> list[str]:
        return self.registry.names()

    def auto_complete_commands(self, index: int, tokens: list[str]) -> list[str]:
        """Completion source registered with the line editor."""
        return resolve_completions(self.registry, index, tokens)

    # Read-eval-print loop

    async def repl(self) -> None:
        """
        Run the read-eval-print loop.

        Loops until the line editor signals end of input (EOFError).
        Ctrl+C at the prompt re-prompts.

        Raises:
            RuntimeError: If the loop is already running.
        """
        if self._running:
            raise RuntimeError("REPL is already running")

        self._running = True
        try:
            while True:
                try:
                    await self.repl_step()
                except KeyboardInterrupt:
                    continue
                except EOFError:
                    logger.debug("End of input, leaving REPL")
                    break
        finally:
            self._running = False

    async def repl_step(self) -> None:
        """
        Run one pass of the loop: prompt, read, parse, dispatch.

        Any error other than EOFError or KeyboardInterrupt is logged and its
        message printed as a single line.
        """
        try:
            prompt = await self._render_prompt()
            line = await self.echo.read(prompt)
            command = parse_command(line)
            await self.run(command.name, command.args, command.flags)
        except (EOFError, KeyboardInterrupt):
            raise
        except Exception as e:
            logger.exception(f"Command failed: {e}")
            self.echo.println(str(e))

    async def _render_prompt(self) -> str:
        prompt = self.prompt()
        if inspect.isawaitable(prompt):
            prompt = await prompt
        return prompt

    async def run(
        self,
        command: Optional[str],
        args: Optional[list[str]] = None,
        flags: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Run a command in the shell.

        Awaits an awaitable result; prints each chunk of a sequence result
        in order as it is produced.

        Args:
            command: Name of the command. None or empty is a no-op.
            args: Positional arguments.
            flags: Parsed flags.

        Raises:
            CommandNotFoundError: If the command is not registered.
        """
        if not command:
            return

        entry = self.registry.get(command)
        if entry is None:
            raise CommandNotFoundError(command)

        context = SubShell(self)
        try:
            result = entry.handler(context, list(args or []), dict(flags or {}))
            await drain(classify_result(result), context.print)
        finally:
            context.destroy()

    # I/O primitives

    async def read_char(self, prompt: str = "") -> str:
        return await self.echo.read_char(prompt)

    async def read_line(self, prompt: str = "") -> str:
        return await self.echo.read(prompt)

    def abort_read(self, reason: str = "") -> None:
        self.echo.abort_read(reason)

    def print(self, message: Any) -> None:
        """Write text to the terminal without a trailing newline."""
        self.terminal.write(message if isinstance(message, str) else str(message))

    def print_line(self, message: str = "") -> None:
        self.echo.println(message)

    def print_list(self, items: list[str]) -> None:
        self.echo.print_wide(items)

    def clear(self) -> None:
        self.terminal.clear()

    def style(self, text: str, spec: str) -> str:
        """Render text with an ANSI style such as "bold green"."""
        return stylize(text, spec)

    @property
    def columns(self) -> int:
        return self.terminal.cols

    @property
    def rows(self) -> int:
        return self.terminal.rows
