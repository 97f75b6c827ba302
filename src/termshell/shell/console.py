"""
prompt_toolkit-backed line editor and terminal.

These are the concrete collaborators the CLI runs the shell on: a
PromptSession for line editing with completion, rich for printing, and
raw-mode prompt_toolkit input for keystroke streams.
"""

import asyncio
import logging
from collections.abc import Callable
from contextlib import ExitStack
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.input import Input, create_input
from prompt_toolkit.output import Output, create_output
from prompt_toolkit.styles import Style
from rich.columns import Columns
from rich.console import Console
from rich.text import Text

from termshell.shell.completer import AutocompleteAdapter
from termshell.shell.errors import ReadAbortedError
from termshell.shell.terminal import (
    AutocompleteHandler,
    Disposable,
    LineEditor,
    TerminalSurface,
)

logger = logging.getLogger(__name__)

PROMPT_STYLE = Style.from_dict({
    "completion-menu.completion": "bg:#008888 #ffffff",
    "completion-menu.completion.current": "bg:#00aaaa #000000",
})


class PromptToolkitLineEditor(LineEditor):
    """
    Line editor built on a prompt_toolkit PromptSession.

    Attributes:
        console: Rich console used for printed output.
        session: The underlying prompt_toolkit session.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        complete_while_typing: bool = False,
        input_factory: Callable[[], Input] = create_input,
    ):
        """
        Args:
            console: Rich console for output. Creates a new one if None.
            complete_while_typing: Show completions without pressing Tab.
            input_factory: Creates the raw input used by read_char().
        """
        self.console = console or Console(highlight=False)
        self._completer = AutocompleteAdapter()
        self._input_factory = input_factory
        self._attached = True
        self._pending_char: Optional[asyncio.Future] = None
        self.session: PromptSession = PromptSession(
            completer=self._completer,
            complete_while_typing=complete_while_typing,
            style=PROMPT_STYLE,
        )

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        self._attached = True

    def detach(self) -> None:
        # The session only reads while prompt_async() runs; a detached editor
        # refuses to start a read so raw input has a single consumer.
        self._attached = False

    def _check_attached(self) -> None:
        if not self._attached:
            raise RuntimeError("Line editor is detached from the terminal")

    async def read(self, prompt: str) -> str:
        self._check_attached()
        return await self.session.prompt_async(prompt)

    async def read_char(self, prompt: str) -> str:
        self._check_attached()
        if prompt:
            self.console.print(prompt, end="", markup=False, highlight=False)

        future: asyncio.Future = asyncio.get_running_loop().create_future()
        raw_input = self._input_factory()

        def _on_ready() -> None:
            for key_press in raw_input.read_keys():
                if not future.done():
                    future.set_result(key_press.data)

        self._pending_char = future
        try:
            with raw_input.raw_mode(), raw_input.attach(_on_ready):
                return await future
        finally:
            self._pending_char = None
            raw_input.close()

    def abort_read(self, reason: str = "") -> None:
        if self._pending_char is not None and not self._pending_char.done():
            self._pending_char.set_exception(ReadAbortedError(reason))
            return

        app = self.session.app
        if app.is_running:
            app.exit(exception=ReadAbortedError(reason))
        else:
            logger.debug("abort_read called with no pending read")

    def println(self, message: str) -> None:
        self.console.print(Text.from_ansi(message))

    def print_wide(self, items: list[str]) -> None:
        self.console.print(Columns([str(item) for item in items]))

    def add_autocomplete_handler(self, handler: AutocompleteHandler) -> None:
        self._completer.add_handler(handler)


class _RawInputSubscription(Disposable):
    """Raw-mode key reader attached to the running event loop."""

    def __init__(
        self,
        raw_input: Input,
        callback: Callable[[str], None],
        on_end: Optional[Callable[[], None]],
        on_dispose: Callable[["_RawInputSubscription"], None],
    ):
        self._input = raw_input
        self._callback = callback
        self._on_end = on_end
        self._on_dispose = on_dispose
        self._stack = ExitStack()
        self._disposed = False

    def start(self) -> None:
        self._stack.enter_context(self._input.raw_mode())
        self._stack.enter_context(self._input.attach(self._on_ready))

    def _on_ready(self) -> None:
        for key_press in self._input.read_keys():
            self._callback(key_press.data)
        if self._input.closed:
            self.end()

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._stack.close()
        self._input.close()
        self._on_dispose(self)

    def end(self) -> None:
        """Dispose from the terminal side and notify the subscriber."""
        if self._disposed:
            return
        self.dispose()
        if self._on_end is not None:
            self._on_end()


class PromptToolkitTerminal(TerminalSurface):
    """Terminal surface over prompt_toolkit's input and output layers."""

    def __init__(
        self,
        output: Optional[Output] = None,
        input_factory: Callable[[], Input] = create_input,
    ):
        self._output = output or create_output()
        self._input_factory = input_factory
        self._subscriptions: list[_RawInputSubscription] = []

    def write(self, text: str) -> None:
        self._output.write_raw(text)
        self._output.flush()

    def clear(self) -> None:
        self._output.erase_screen()
        self._output.cursor_goto(0, 0)
        self._output.flush()

    def on_data(
        self,
        callback: Callable[[str], None],
        on_end: Optional[Callable[[], None]] = None,
    ) -> Disposable:
        subscription = _RawInputSubscription(
            self._input_factory(), callback, on_end, self._subscriptions.remove
        )
        subscription.start()
        self._subscriptions.append(subscription)
        return subscription

    def close(self) -> None:
        """End every raw input subscription."""
        for subscription in list(self._subscriptions):
            subscription.end()

    @property
    def cols(self) -> int:
        return self._output.get_size().columns

    @property
    def rows(self) -> int:
        return self._output.get_size().rows
