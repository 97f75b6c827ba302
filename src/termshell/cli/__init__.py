"""
CLI for termshell.

Provides the command-line entry point that starts the interactive shell.
"""

import asyncio
from pathlib import Path
from string import Template
from typing import Optional

import typer
import yaml
from dotenv import load_dotenv
from rich.console import Console

from termshell.cli.builtins import register_builtin_commands
from termshell.cli.ui import render_error, render_welcome_banner
from termshell.core.config import ShellConfig, load_config
from termshell.shell.console import PromptToolkitLineEditor, PromptToolkitTerminal
from termshell.shell.session import Shell

# Initialize Rich Console
console = Console()

app = typer.Typer(
    name="termshell",
    help="termshell - interactive command shell",
    add_completion=False,
)

_CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="YAML or JSON configuration file"
)


def _load(config_path: Optional[Path]) -> ShellConfig:
    load_dotenv()
    try:
        return load_config(config_path)
    except (FileNotFoundError, ValueError, TypeError, yaml.YAMLError) as e:
        render_error(str(e), console)
        raise typer.Exit(1)


def create_shell(cfg: ShellConfig, output: Optional[Console] = None) -> Shell:
    """
    Build a shell on a prompt_toolkit line editor and terminal.

    The prompt template is expanded against the shell environment on every
    prompt, so ``$USER> `` follows ``set USER ...``.

    Args:
        cfg: Loaded configuration.
        output: Rich console for printed output.

    Returns:
        Shell with the built-in commands registered.
    """
    echo = PromptToolkitLineEditor(
        console=output or console,
        complete_while_typing=cfg.shell.complete_while_typing,
    )
    template = Template(cfg.shell.prompt)
    shell = Shell(echo, PromptToolkitTerminal())
    shell.prompt = lambda: template.safe_substitute(shell.environment)
    return register_builtin_commands(shell)


@app.command()
def shell(
    config: Optional[Path] = _CONFIG_OPTION,
    prompt: Optional[str] = typer.Option(None, "--prompt", "-p", help="Prompt template"),
):
    """Start the interactive shell."""
    cfg = _load(config)
    cfg.logging.apply()
    if prompt is not None:
        cfg.shell.prompt = prompt

    if cfg.shell.banner:
        render_welcome_banner(console)

    try:
        asyncio.run(create_shell(cfg).repl())
    except KeyboardInterrupt:
        pass
    console.print("[cyan]Goodbye![/cyan]")


@app.command("config")
def show_config(config: Optional[Path] = _CONFIG_OPTION):
    """Print the effective configuration as YAML."""
    cfg = _load(config)
    console.print(cfg.to_yaml(), markup=False, highlight=False)


if __name__ == "__main__":
    app()
