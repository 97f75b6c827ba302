"""ANSI styling helper for command output."""

from rich.style import Style


def stylize(text: str, spec: str) -> str:
    """
    Wrap text in the ANSI escape codes for a style.

    Args:
        text: Text to style.
        spec: Rich style definition, e.g. "bold red" or "green on black".

    Returns:
        The styled text, ready to be written to a terminal.
    """
    return Style.parse(spec).render(text)
