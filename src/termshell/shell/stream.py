"""
Raw input stream for commands that need keystroke-level control.

Opening a stream borrows terminal input from the shell's line editor;
closing it gives the input back. Every exit path closes the stream: normal
end of input, an explicit close or ``async with`` exit, and destruction of
the owning command context.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Callable, Optional

from termshell.shell.terminal import Disposable

if TYPE_CHECKING:
    from termshell.shell.session import Shell

logger = logging.getLogger(__name__)

_END = object()


class RawInputStream:
    """
    Single-pass async iterator over raw terminal input chunks.

    Terminal input is claimed lazily, on the first pull or on entering
    ``async with``, and released exactly once. Chunks received before the
    stream closed are still delivered, in order, before iteration stops.

    Example:
        async with context.read_stream() as keys:
            async for data in keys:
                if data == "q":
                    break
    """

    def __init__(self, shell: "Shell", is_stale: Callable[[], bool]) -> None:
        """
        Args:
            shell: Shell whose terminal input is borrowed.
            is_stale: Returns True once the owning context is destroyed.
        """
        self._shell = shell
        self._is_stale = is_stale
        self._queue: asyncio.Queue = asyncio.Queue()
        self._subscription: Optional[Disposable] = None
        self._opened = False
        self._closed = False

    @property
    def active(self) -> bool:
        """True while terminal input is borrowed by this stream."""
        return self._opened and not self._closed

    @property
    def closed(self) -> bool:
        return self._closed

    def open(self) -> None:
        """Claim terminal input. No-op if already opened or closed."""
        if self._opened or self._closed:
            return

        self._shell.claim_input(self)
        self._opened = True
        try:
            self._subscription = self._shell.terminal.on_data(
                self._queue.put_nowait, on_end=self.close
            )
        except Exception:
            self.close()
            raise
        logger.debug("Raw input stream opened")

    def close(self) -> None:
        """Stop the stream and hand terminal input back. Idempotent."""
        if self._closed:
            return
        self._closed = True

        if not self._opened:
            return

        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
        self._shell.release_input(self)
        # Wake a consumer waiting on the next chunk
        self._queue.put_nowait(_END)
        logger.debug("Raw input stream closed")

    async def aclose(self) -> None:
        self.close()

    def __aiter__(self) -> "RawInputStream":
        return self

    async def __anext__(self) -> str:
        if self._is_stale() or (self._closed and self._queue.empty()):
            self.close()
            raise StopAsyncIteration

        self.open()
        try:
            chunk = await self._queue.get()
        except asyncio.CancelledError:
            self.close()
            raise

        if chunk is _END or self._is_stale():
            self.close()
            raise StopAsyncIteration
        return chunk

    async def __aenter__(self) -> "RawInputStream":
        self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()
