"""Unit tests for configuration loading."""

import json

import pytest

from termshell.core.config import LoggingConfig, ShellConfig, load_config


class TestShellConfig:
    def test_defaults_come_from_defaults_yaml(self):
        config = ShellConfig()

        assert config.shell.prompt == "$ "
        assert config.shell.banner is True
        assert config.shell.complete_while_typing is False
        assert config.logging.level == "WARNING"

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "termshell.yaml"
        path.write_text("shell:\n  prompt: '>> '\n  banner: false\n", encoding="utf-8")

        config = ShellConfig.from_file(path)

        assert config.shell.prompt == ">> "
        assert config.shell.banner is False
        assert config.logging == LoggingConfig()

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "termshell.json"
        path.write_text(json.dumps({"logging": {"level": "DEBUG"}}), encoding="utf-8")

        config = ShellConfig.from_file(path)

        assert config.logging.level == "DEBUG"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ShellConfig.from_file(tmp_path / "absent.yaml")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "termshell.ini"
        path.write_text("[shell]\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported config file format"):
            ShellConfig.from_file(path)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("TERMSHELL_SHELL_PROMPT", "% ")
        monkeypatch.setenv("TERMSHELL_SHELL_BANNER", "no")
        monkeypatch.setenv("TERMSHELL_LOGGING_LEVEL", "INFO")

        config = load_config()

        assert config.shell.prompt == "% "
        assert config.shell.banner is False
        assert config.logging.level == "INFO"

    def test_env_overrides_can_be_skipped(self, monkeypatch):
        monkeypatch.setenv("TERMSHELL_SHELL_PROMPT", "% ")

        assert load_config(apply_env=False).shell.prompt == "$ "

    def test_to_yaml_contains_sections(self):
        text = ShellConfig().to_yaml()

        assert "shell:" in text
        assert "logging:" in text
