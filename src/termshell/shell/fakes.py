"""
Fake implementations for testing.

Provides in-memory line editor and terminal implementations so the shell
can be driven by scripted input without a real console.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Callable, Iterable
from typing import Optional, Union

from termshell.shell.errors import ReadAbortedError
from termshell.shell.terminal import (
    AutocompleteHandler,
    Disposable,
    LineEditor,
    TerminalSurface,
)


class FakeLineEditor(LineEditor):
    """
    Scripted line editor.

    Lines are served from a queue; an Exception instance in the queue is
    raised instead of returned. When the queue is empty, reads raise
    EOFError unless ``eof_when_empty`` is False, in which case they wait
    for feed_line() or abort_read().
    """

    def __init__(
        self,
        lines: Optional[Iterable[Union[str, BaseException]]] = None,
        chars: Optional[Iterable[str]] = None,
        eof_when_empty: bool = True,
    ):
        self.lines: deque[Union[str, BaseException]] = deque(lines or [])
        self.chars: deque[str] = deque(chars or [])
        self.eof_when_empty = eof_when_empty

        self.prompts: list[str] = []
        self.output: list[str] = []
        self.wide_output: list[list[str]] = []
        self.handlers: list[AutocompleteHandler] = []

        self.attached = True
        self.attach_calls = 0
        self.detach_calls = 0

        self._pending: Optional[asyncio.Future] = None

    def attach(self) -> None:
        self.attach_calls += 1
        self.attached = True

    def detach(self) -> None:
        self.detach_calls += 1
        self.attached = False

    async def _next(self, queue: deque, prompt: str):
        self.prompts.append(prompt)
        if queue:
            item = queue.popleft()
            if isinstance(item, BaseException):
                raise item
            return item
        if self.eof_when_empty:
            raise EOFError

        self._pending = asyncio.get_running_loop().create_future()
        try:
            return await self._pending
        finally:
            self._pending = None

    async def read(self, prompt: str) -> str:
        return await self._next(self.lines, prompt)

    async def read_char(self, prompt: str) -> str:
        return await self._next(self.chars, prompt)

    def feed_line(self, line: str) -> None:
        """Resolve a waiting read, or queue the line for the next one."""
        if self._pending is not None and not self._pending.done():
            self._pending.set_result(line)
        else:
            self.lines.append(line)

    def abort_read(self, reason: str = "") -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.set_exception(ReadAbortedError(reason))

    @property
    def reading(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def println(self, message: str) -> None:
        self.output.append(message)

    def print_wide(self, items: list[str]) -> None:
        self.wide_output.append(list(items))

    def add_autocomplete_handler(self, handler: AutocompleteHandler) -> None:
        self.handlers.append(handler)

    def complete(self, index: int, tokens: list[str]) -> list[str]:
        """Collect candidates from every registered handler."""
        candidates: list[str] = []
        for handler in self.handlers:
            candidates.extend(handler(index, tokens))
        return candidates


class _FakeSubscription(Disposable):
    def __init__(
        self,
        terminal: FakeTerminal,
        callback: Callable[[str], None],
        on_end: Optional[Callable[[], None]],
    ):
        self.terminal = terminal
        self.callback = callback
        self.on_end = on_end
        self.disposed = False

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        self.terminal.subscriptions.remove(self)


class FakeTerminal(TerminalSurface):
    """In-memory terminal recording writes and replaying pushed input."""

    def __init__(self, cols: int = 80, rows: int = 24):
        self._cols = cols
        self._rows = rows
        self.writes: list[str] = []
        self.clear_count = 0
        self.subscriptions: list[_FakeSubscription] = []

    def write(self, text: str) -> None:
        self.writes.append(text)

    def clear(self) -> None:
        self.clear_count += 1

    def on_data(
        self,
        callback: Callable[[str], None],
        on_end: Optional[Callable[[], None]] = None,
    ) -> Disposable:
        subscription = _FakeSubscription(self, callback, on_end)
        self.subscriptions.append(subscription)
        return subscription

    def push(self, data: str) -> None:
        """Deliver a raw input chunk to every subscriber."""
        for subscription in list(self.subscriptions):
            subscription.callback(data)

    def end_input(self) -> None:
        """Dispose the input source, ending every subscription."""
        for subscription in list(self.subscriptions):
            subscription.dispose()
            if subscription.on_end is not None:
                subscription.on_end()

    @property
    def output(self) -> str:
        return "".join(self.writes)

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def rows(self) -> int:
        return self._rows
