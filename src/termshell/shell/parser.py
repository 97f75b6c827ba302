"""
Command parser module for termshell.

Turns a raw input line into a command name, positional arguments and
flag-style options.
"""

import shlex
from dataclasses import dataclass, field
from typing import Any, Optional

from termshell.shell.errors import CommandParseError


@dataclass
class ParsedCommand:
    """
    Represents a parsed command line.

    Attributes:
        name: The command name (first token), or None for an empty line.
        args: Positional arguments following the command.
        flags: Options given as -x, --name or --name=value.
    """

    name: Optional[str]
    args: list[str] = field(default_factory=list)
    flags: dict[str, Any] = field(default_factory=dict)


def tokenize(line: str) -> list[str]:
    """
    Split a line on shell-like whitespace and quoting.

    Raises:
        CommandParseError: If the line has an unclosed quote or a dangling escape.

    Examples:
        >>> tokenize('echo "hello world" x')
        ['echo', 'hello world', 'x']
    """
    try:
        return shlex.split(line, posix=True)
    except ValueError as e:
        raise CommandParseError(f"Failed to parse command: {e}") from e


def _is_flag(token: str) -> bool:
    # "-" alone and negative numbers stay positional
    if len(token) < 2 or not token.startswith("-"):
        return False
    return not (token[1].isdigit() or token[1] == ".")


def _set_flag(flags: dict[str, Any], key: str, value: Any) -> None:
    if key in flags:
        previous = flags[key]
        if isinstance(previous, list):
            previous.append(value)
        else:
            flags[key] = [previous, value]
    else:
        flags[key] = value


def parse_flags(argv: list[str]) -> tuple[list[str], dict[str, Any]]:
    """
    Split argv into positional arguments and flags.

    Conventions:
    - ``--name`` sets ``name`` to True, ``--no-name`` sets it to False
    - ``--name=value`` and ``-n=value`` set a string value
    - ``-abc`` sets ``a``, ``b`` and ``c`` to True
    - a flag given more than once collects its values in a list
    - everything after ``--`` is positional

    Args:
        argv: Tokens following the command name.

    Returns:
        Tuple of (positional arguments, flags).
    """
    args: list[str] = []
    flags: dict[str, Any] = {}

    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            args.extend(tokens)
            break

        if not _is_flag(token):
            args.append(token)
            continue

        if token.startswith("--"):
            body = token[2:]
            if "=" in body:
                key, _, value = body.partition("=")
                _set_flag(flags, key, value)
            elif body.startswith("no-") and len(body) > 3:
                _set_flag(flags, body[3:], False)
            else:
                _set_flag(flags, body, True)
        else:
            body = token[1:]
            if "=" in body:
                key, _, value = body.partition("=")
                _set_flag(flags, key, value)
            else:
                for letter in body:
                    _set_flag(flags, letter, True)

    return args, flags


def parse_command(line: str) -> ParsedCommand:
    """
    Parse user input into a structured command.

    An empty or whitespace-only line yields a command with no name.

    Raises:
        CommandParseError: If the line cannot be tokenized.

    Examples:
        >>> parse_command("echo hello world")
        ParsedCommand(name='echo', args=['hello', 'world'], flags={})

        >>> parse_command("ls -la --color=auto src")
        ParsedCommand(name='ls', args=['src'], flags={'l': True, 'a': True, 'color': 'auto'})
    """
    tokens = tokenize(line)
    if not tokens:
        return ParsedCommand(name=None)

    args, flags = parse_flags(tokens[1:])
    return ParsedCommand(name=tokens[0], args=args, flags=flags)
