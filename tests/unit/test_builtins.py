"""Integration tests for the built-in commands run through the REPL."""

import asyncio

import pytest

from termshell.cli.builtins import register_builtin_commands
from termshell.shell.fakes import FakeLineEditor, FakeTerminal
from termshell.shell.session import Shell


def make_shell(*lines) -> tuple[Shell, FakeLineEditor, FakeTerminal]:
    editor = FakeLineEditor(lines)
    terminal = FakeTerminal()
    shell = register_builtin_commands(Shell(editor, terminal))
    return shell, editor, terminal


class TestBuiltinCommands:
    @pytest.mark.asyncio
    async def test_echo(self):
        shell, editor, terminal = make_shell("echo hello   world", 'echo -n "no newline"')

        await shell.repl()

        assert editor.output == ["hello world"]
        assert terminal.writes == ["no newline"]

    @pytest.mark.asyncio
    async def test_set_env_unset(self):
        shell, _, terminal = make_shell(
            "set NAME Ada Lovelace",
            "set LANG en",
            "env",
            "unset LANG",
        )

        await shell.repl()

        assert terminal.writes == ["LANG=en\n", "NAME=Ada Lovelace\n"]
        assert shell.environment == {"NAME": "Ada Lovelace"}

    @pytest.mark.asyncio
    async def test_usage_errors_are_printed(self):
        shell, editor, _ = make_shell("set ONLY", "unset", "read")

        await shell.repl()

        assert editor.output == [
            "Usage: set <name> <value>",
            "Usage: unset <name>...",
            "Usage: read <name> [prompt]",
        ]

    @pytest.mark.asyncio
    async def test_help_lists_sorted_commands(self):
        shell, editor, _ = make_shell("help")

        await shell.repl()

        assert editor.wide_output == [
            ["clear", "echo", "env", "help", "keys", "read", "set", "unset"]
        ]

    @pytest.mark.asyncio
    async def test_read_stores_line_in_environment(self):
        shell, editor, _ = make_shell("read CITY", "London")

        await shell.repl()

        assert shell.environment["CITY"] == "London"
        assert editor.prompts[1] == "CITY: "

    @pytest.mark.asyncio
    async def test_clear(self):
        shell, _, terminal = make_shell("clear")

        await shell.repl()

        assert terminal.clear_count == 1

    @pytest.mark.asyncio
    async def test_keys_echoes_raw_input_until_quit(self):
        shell, editor, terminal = make_shell()

        task = asyncio.create_task(shell.run("keys"))
        while not terminal.subscriptions:
            await asyncio.sleep(0)
        terminal.push("a")
        terminal.push("\x1b[A")
        terminal.push("q")
        await task

        assert "Press keys" in editor.output[0]
        assert editor.output[1:] == ["'a'", repr("\x1b[A")]
        assert (editor.detach_calls, editor.attach_calls) == (1, 1)
        assert shell.attached


class TestBuiltinCompletion:
    def test_help_completes_command_names(self):
        shell, editor, _ = make_shell()

        assert "echo" in editor.complete(1, ["help", "e"])
        assert editor.complete(2, ["help", "echo", ""]) == []

    def test_set_and_unset_complete_variable_names(self):
        shell, editor, _ = make_shell()
        shell.environment.update(PATH="/bin", HOME="/root")

        assert editor.complete(1, ["set", "P"]) == ["HOME", "PATH"]
        assert editor.complete(2, ["set", "PATH", ""]) == []
        assert editor.complete(3, ["unset", "A", "B", ""]) == ["HOME", "PATH"]
