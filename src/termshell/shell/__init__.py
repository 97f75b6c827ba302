"""
Shell core for termshell.

This package provides the command registry, the read-eval-print loop,
per-command contexts with revocable terminal access, and command
completion.
"""

from termshell.shell.completer import AutocompleteAdapter, resolve_completions
from termshell.shell.console import PromptToolkitLineEditor, PromptToolkitTerminal
from termshell.shell.context import SubShell
from termshell.shell.errors import (
    CommandAlreadyRegistered,
    CommandNotFoundError,
    CommandParseError,
    ContextDestroyedError,
    InputBusyError,
    ReadAbortedError,
    ShellError,
)
from termshell.shell.parser import ParsedCommand, parse_command, parse_flags, tokenize
from termshell.shell.registry import CommandEntry, CommandRegistry
from termshell.shell.results import Immediate, Streamed, classify_result
from termshell.shell.session import Shell
from termshell.shell.stream import RawInputStream
from termshell.shell.terminal import Disposable, LineEditor, TerminalSurface

__all__ = [
    "AutocompleteAdapter",
    "CommandAlreadyRegistered",
    "CommandEntry",
    "CommandNotFoundError",
    "CommandParseError",
    "CommandRegistry",
    "ContextDestroyedError",
    "Disposable",
    "Immediate",
    "InputBusyError",
    "LineEditor",
    "ParsedCommand",
    "PromptToolkitLineEditor",
    "PromptToolkitTerminal",
    "RawInputStream",
    "ReadAbortedError",
    "Shell",
    "ShellError",
    "Streamed",
    "SubShell",
    "TerminalSurface",
    "classify_result",
    "parse_command",
    "parse_flags",
    "resolve_completions",
    "tokenize",
]
