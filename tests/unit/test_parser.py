"""Unit tests for command line tokenizing and flag parsing."""

import pytest

from termshell.shell.errors import CommandParseError
from termshell.shell.parser import ParsedCommand, parse_command, parse_flags, tokenize


class TestTokenize:
    def test_splits_on_whitespace(self):
        assert tokenize("echo  hello\tworld") == ["echo", "hello", "world"]

    def test_quotes_group_words(self):
        assert tokenize("""say "hello world" 'single quoted'""") == [
            "say",
            "hello world",
            "single quoted",
        ]

    def test_unclosed_quote_raises(self):
        with pytest.raises(CommandParseError):
            tokenize('echo "unterminated')


class TestParseFlags:
    def test_long_flag_without_value_is_true(self):
        assert parse_flags(["--verbose", "file"]) == (["file"], {"verbose": True})

    def test_long_flag_with_value(self):
        assert parse_flags(["--color=auto"]) == ([], {"color": "auto"})

    def test_negated_long_flag_is_false(self):
        assert parse_flags(["--no-color"]) == ([], {"color": False})

    def test_short_flags_are_grouped(self):
        assert parse_flags(["-la", "src"]) == (["src"], {"l": True, "a": True})

    def test_short_flag_with_value(self):
        assert parse_flags(["-n=3"]) == ([], {"n": "3"})

    def test_repeated_flag_collects_values(self):
        assert parse_flags(["--tag=a", "--tag=b", "--tag=c"]) == ([], {"tag": ["a", "b", "c"]})

    def test_negative_numbers_and_lone_dash_are_positional(self):
        assert parse_flags(["-5", "-", "-.5"]) == (["-5", "-", "-.5"], {})

    def test_double_dash_stops_flag_parsing(self):
        assert parse_flags(["-v", "--", "-x", "--y"]) == (["-x", "--y"], {"v": True})


class TestParseCommand:
    def test_name_args_and_flags(self):
        assert parse_command("ls -la --color=auto src") == ParsedCommand(
            name="ls",
            args=["src"],
            flags={"l": True, "a": True, "color": "auto"},
        )

    def test_name_is_case_sensitive(self):
        assert parse_command("Echo hi").name == "Echo"

    @pytest.mark.parametrize("line", ["", "   ", "\t \n"])
    def test_blank_line_has_no_command(self, line):
        assert parse_command(line) == ParsedCommand(name=None)
