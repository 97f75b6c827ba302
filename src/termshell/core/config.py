"""
Configuration module for termshell.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section, {})
    return section_defaults.get(key, fallback)


@dataclass
class ShellSection:
    """Configuration for the interactive shell."""

    prompt: str = field(default_factory=lambda: _get_default("shell", "prompt", "$ "))
    banner: bool = field(default_factory=lambda: _get_default("shell", "banner", True))
    complete_while_typing: bool = field(
        default_factory=lambda: _get_default("shell", "complete_while_typing", False)
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )

    def apply(self) -> None:
        """Configure the root logger; diagnostics go to stderr."""
        logging.basicConfig(
            level=getattr(logging, self.level.upper(), logging.WARNING),
            format=self.format,
        )


@dataclass
class ShellConfig:
    """Main configuration class for termshell."""

    shell: ShellSection = field(default_factory=ShellSection)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "ShellConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            ShellConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported or the JSON is malformed
            yaml.YAMLError: If the YAML is malformed
            TypeError: If a section has an unknown key
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "ShellConfig":
        """Create ShellConfig from a dictionary."""
        config = cls()

        if "shell" in data:
            config.shell = ShellSection(**data["shell"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def apply_env_overrides(self) -> "ShellConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: TERMSHELL_<SECTION>_<KEY>
        Examples:
            - TERMSHELL_SHELL_PROMPT
            - TERMSHELL_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            "TERMSHELL_SHELL_PROMPT": ("shell", "prompt", str),
            "TERMSHELL_SHELL_BANNER": ("shell", "banner", _parse_bool),
            "TERMSHELL_SHELL_COMPLETE_WHILE_TYPING": (
                "shell",
                "complete_while_typing",
                _parse_bool,
            ),
            "TERMSHELL_LOGGING_LEVEL": ("logging", "level", str),
            "TERMSHELL_LOGGING_FORMAT": ("logging", "format", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)


def _parse_bool(value: str) -> bool:
    """Parse a string to boolean."""
    return value.lower() in ("true", "1", "yes", "on")


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> ShellConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        ShellConfig instance
    """
    if config_path:
        config = ShellConfig.from_file(config_path)
    else:
        config = ShellConfig()

    if apply_env:
        config.apply_env_overrides()

    return config
