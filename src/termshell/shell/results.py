"""
Command result classification.

A handler may return a plain value, an awaitable, or a lazy sequence of
output chunks. The result is classified once at the call boundary so the
dispatch loop only deals with two shapes.
"""

import inspect
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Immediate:
    """A single eventual value; the payload is awaited and ignored."""

    value: Any


@dataclass(frozen=True)
class Streamed:
    """A lazy sequence of output chunks to be printed in order."""

    chunks: Union[AsyncIterator[Any], Iterator[Any]]


CommandOutcome = Union[Immediate, Streamed]


def classify_result(result: Any) -> CommandOutcome:
    """
    Classify a handler's return value.

    Async iterators and generators are streamed; so are sync iterators
    (excluding strings and bytes, which are values). Everything else,
    awaitables included, is an immediate value.
    """
    if hasattr(result, "__aiter__"):
        return Streamed(result.__aiter__())
    if inspect.isawaitable(result):
        return Immediate(result)
    if isinstance(result, Iterator) and not isinstance(result, (str, bytes)):
        return Streamed(result)
    return Immediate(result)


async def drain(outcome: CommandOutcome, emit) -> None:
    """
    Run a classified outcome to completion.

    Args:
        outcome: Result from classify_result().
        emit: Called with each chunk, in sequence order.
    """
    if isinstance(outcome, Immediate):
        if inspect.isawaitable(outcome.value):
            await outcome.value
        return

    chunks = outcome.chunks
    if hasattr(chunks, "__anext__"):
        try:
            async for chunk in chunks:
                emit(chunk)
        finally:
            aclose = getattr(chunks, "aclose", None)
            if aclose is not None:
                await aclose()
    else:
        try:
            for chunk in chunks:
                emit(chunk)
        finally:
            close = getattr(chunks, "close", None)
            if close is not None:
                close()
