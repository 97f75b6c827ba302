"""Core configuration for termshell."""

from termshell.core.config import LoggingConfig, ShellConfig, ShellSection, load_config

__all__ = [
    "LoggingConfig",
    "ShellConfig",
    "ShellSection",
    "load_config",
]
