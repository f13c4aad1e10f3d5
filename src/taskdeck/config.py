"""Configuration file support for Taskdeck."""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILE = Path.home() / ".config" / "taskdeck" / "taskdeck.toml"
CONFIG_ENV_VAR = "TASKDECK_CONFIG"

DEFAULT_DATABASE_NAME = "tasks.db"
DEFAULT_THEME = "textual-dark"
DEFAULT_LOG_FILE = Path.home() / ".local" / "state" / "taskdeck" / "taskdeck.log"
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Config:
    """Application configuration."""

    database_path: Path = field(default_factory=lambda: Path.cwd() / DEFAULT_DATABASE_NAME)
    theme: str = DEFAULT_THEME
    log_file: Path = DEFAULT_LOG_FILE
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def log_level_value(self) -> int:
        """The log level as a logging module constant."""
        return getattr(logging, self.log_level)


def config_path() -> Path:
    """Return the config file path, honoring the TASKDECK_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE


def load_config(path: Path | None = None) -> Config:
    """Load configuration from the config file.

    Returns the default configuration if:
    - The config file doesn't exist
    - The config file has invalid TOML syntax
    - The file cannot be read

    Returns:
        Config object with loaded or default values.
    """
    path = path or config_path()
    if not path.exists():
        return Config()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        # Invalid TOML or read error - use defaults
        return Config()

    return _parse_config(data)


def _resolve_path(value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def _parse_config(data: dict[str, Any]) -> Config:
    """Parse configuration from a dictionary.

    Args:
        data: Dictionary from parsed TOML file.

    Returns:
        Config object with parsed values. Unknown keys and values of the
        wrong type are ignored.
    """
    config = Config()

    if "database_path" in data and isinstance(data["database_path"], str):
        config.database_path = _resolve_path(data["database_path"])

    if "theme" in data and isinstance(data["theme"], str):
        config.theme = data["theme"]

    if "log_file" in data and isinstance(data["log_file"], str):
        config.log_file = _resolve_path(data["log_file"])

    if "log_level" in data and isinstance(data["log_level"], str):
        value = data["log_level"].upper()
        if value in LOG_LEVELS:
            config.log_level = value

    return config
