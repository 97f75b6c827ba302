"""
UI components module for the termshell CLI.

Provides styled terminal output using Rich library for the welcome banner
and error rendering outside the REPL.
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from termshell import __version__ as VERSION


def render_welcome_banner(console: Console) -> None:
    """
    Render the welcome banner.

    Args:
        console: Rich Console instance for output.
    """
    content = Text()
    content.append("termshell", style="bold cyan")
    content.append(f" v{VERSION}\n\n", style="dim")
    content.append("Type ", style="white")
    content.append("help", style="bold green")
    content.append(" for available commands, ", style="white")
    content.append("Tab", style="bold green")
    content.append(" to complete, ", style="white")
    content.append("Ctrl+D", style="bold yellow")
    content.append(" to quit.", style="white")

    console.print(Panel(content, border_style="cyan", padding=(0, 2), expand=False))


def render_error(message: str, console: Console) -> None:
    """
    Render an error message in red.

    Args:
        message: Error message to display.
        console: Rich Console instance for output.
    """
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
