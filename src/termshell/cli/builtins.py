"""
Built-in commands for the termshell CLI.

Each command takes (context, args, flags). Commands raise ValueError with a
usage line on bad input; the shell prints the message and re-prompts.
"""

from collections.abc import Iterator
from typing import Any

from termshell.shell.context import SubShell
from termshell.shell.session import Shell

# Raw key data that ends the `keys` command: "q" or Ctrl+C
KEYS_QUIT = ("q", "\x03")


def help_command(context: SubShell, args: list[str], flags: dict[str, Any]) -> None:
    """List available commands."""
    context.print_list(sorted(context.commands))


def echo_command(context: SubShell, args: list[str], flags: dict[str, Any]) -> None:
    """Print the arguments; -n suppresses the trailing newline."""
    text = " ".join(args)
    if flags.get("n"):
        context.print(text)
    else:
        context.print_line(text)


def set_command(context: SubShell, args: list[str], flags: dict[str, Any]) -> None:
    """Set an environment variable: set NAME VALUE..."""
    if len(args) < 2:
        raise ValueError("Usage: set <name> <value>")
    name, *value = args
    context.environment[name] = " ".join(value)


def unset_command(context: SubShell, args: list[str], flags: dict[str, Any]) -> None:
    """Remove environment variables."""
    if not args:
        raise ValueError("Usage: unset <name>...")
    for name in args:
        context.environment.pop(name, None)


def env_command(context: SubShell, args: list[str], flags: dict[str, Any]) -> Iterator[str]:
    """Stream NAME=value lines for the environment."""
    for name, value in sorted(context.environment.items()):
        yield f"{name}={value}\n"


def clear_command(context: SubShell, args: list[str], flags: dict[str, Any]) -> None:
    context.clear()


async def read_command(context: SubShell, args: list[str], flags: dict[str, Any]) -> None:
    """Read a line into an environment variable: read NAME [PROMPT]."""
    if not args:
        raise ValueError("Usage: read <name> [prompt]")
    prompt = args[1] if len(args) > 1 else f"{args[0]}: "
    context.environment[args[0]] = await context.read_line(prompt)


async def keys_command(context: SubShell, args: list[str], flags: dict[str, Any]) -> None:
    """Show raw key data until q or Ctrl+C is pressed."""
    context.print_line(context.style("Press keys to see their codes, q to quit.", "dim"))
    async with context.read_stream() as keys:
        async for data in keys:
            if data in KEYS_QUIT:
                break
            context.print_line(repr(data))


def register_builtin_commands(shell: Shell) -> Shell:
    """
    Register the built-in commands on a shell.

    Args:
        shell: Shell to register on.

    Returns:
        The shell, for chaining.
    """

    def complete_command_names(index: int, args: list[str]) -> list[str]:
        return shell.commands if index == 0 else []

    def complete_variable_names(index: int, args: list[str]) -> list[str]:
        return sorted(shell.environment) if index == 0 else []

    return (
        shell.register("help", help_command, complete_command_names)
        .register("echo", echo_command)
        .register("set", set_command, complete_variable_names)
        .register("unset", unset_command, lambda index, args: sorted(shell.environment))
        .register("env", env_command)
        .register("read", read_command)
        .register("clear", clear_command)
        .register("keys", keys_command)
    )
