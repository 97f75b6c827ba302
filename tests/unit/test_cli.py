"""
Integration tests for CLI commands.

Tests help output and configuration handling; the interactive shell itself
needs a real console and is covered through the fakes in test_session.py.
"""

from typer.testing import CliRunner

from termshell.cli import app

runner = CliRunner()


class TestCLIHelp:
    """Test CLI help and usage information."""

    def test_main_help(self):
        """Main help should display available commands."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "shell" in result.stdout
        assert "config" in result.stdout

    def test_shell_help(self):
        """Shell command help should display options."""
        result = runner.invoke(app, ["shell", "--help"])

        assert result.exit_code == 0
        assert "--config" in result.stdout
        assert "--prompt" in result.stdout


class TestCLIConfig:
    def test_config_prints_effective_settings(self, monkeypatch):
        monkeypatch.setenv("TERMSHELL_SHELL_PROMPT", "% ")

        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "prompt: '% '" in result.stdout
        assert "level: WARNING" in result.stdout

    def test_config_file_is_loaded(self, tmp_path):
        path = tmp_path / "termshell.yaml"
        path.write_text("logging:\n  level: DEBUG\n", encoding="utf-8")

        result = runner.invoke(app, ["config", "--config", str(path)])

        assert result.exit_code == 0
        assert "level: DEBUG" in result.stdout

    def test_missing_config_file_exits_with_error(self, tmp_path):
        result = runner.invoke(app, ["config", "--config", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "Configuration file not found" in result.stdout

    def test_malformed_yaml_exits_with_error(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("shell: [prompt\n", encoding="utf-8")

        result = runner.invoke(app, ["config", "--config", str(path)])

        assert result.exit_code == 1
        assert "Error:" in result.stdout
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_unknown_section_key_exits_with_error(self, tmp_path):
        path = tmp_path / "termshell.yaml"
        path.write_text("shell:\n  colour: red\n", encoding="utf-8")

        result = runner.invoke(app, ["config", "--config", str(path)])

        assert result.exit_code == 1
        assert "colour" in result.stdout
