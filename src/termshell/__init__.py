"""termshell - an interactive command shell with scoped, revocable terminal access."""

from termshell.shell import Shell, SubShell

__version__ = "0.1.0"

__all__ = ["Shell", "SubShell", "__version__"]
