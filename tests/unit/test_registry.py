"""Unit tests for the command registry."""

import logging

import pytest

from termshell.shell.registry import CommandEntry, CommandRegistry


def _noop(context, args, flags):
    return None


def _other(context, args, flags):
    return None


class TestCommandRegistry:
    def test_register_and_lookup(self):
        registry = CommandRegistry()
        completer = lambda index, args: []

        registry.register("noop", _noop, completer)

        assert registry.has("noop")
        assert "noop" in registry
        assert registry.get("noop") == CommandEntry("noop", _noop, completer)
        assert registry.get("missing") is None
        assert not registry.has("missing")

    def test_register_returns_registry_for_chaining(self):
        registry = CommandRegistry()

        result = registry.register("a", _noop).register("b", _noop)

        assert result is registry
        assert registry.names() == ["a", "b"]

    def test_duplicate_registration_warns_and_overwrites(self, caplog):
        registry = CommandRegistry()
        registry.register("cmd", _noop)

        with caplog.at_level(logging.WARNING, logger="termshell.shell.registry"):
            registry.register("cmd", _other)

        assert registry.get("cmd").handler is _other
        assert len(registry) == 1
        assert "Command Already Registered: cmd" in caplog.text

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            CommandRegistry().register("", _noop)

    def test_clear(self):
        registry = CommandRegistry().register("a", _noop)

        registry.clear()

        assert registry.names() == []
