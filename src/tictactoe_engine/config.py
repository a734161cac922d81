"""Configuration models and loading."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from tictactoe_engine.exceptions import ConfigurationError
from tictactoe_engine.factory import Difficulty, GameMode

CONFIG_DIR_NAME = "tictactoe"
PROJECT_DIR_NAME = ".tictactoe"
CONFIG_FILE_NAME = "config.yaml"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", description="Log level")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if v.upper() not in valid_levels:
            raise ValueError(f"level must be one of: {', '.join(valid_levels)}")
        return v.upper()


class GameConfig(BaseModel):
    """Game configuration."""

    mode: Optional[GameMode] = Field(
        default=None, description="Game mode (prompted when unset)"
    )
    difficulty: Optional[Difficulty] = Field(
        default=None, description="Machine difficulty (prompted when unset)"
    )
    seed: Optional[int] = Field(
        default=None, description="Seed for the machine's random choices"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging config"
    )

    @field_validator("seed")
    @classmethod
    def validate_seed(cls, v: Optional[int]) -> Optional[int]:
        """Validate seed is non-negative."""
        if v is not None and v < 0:
            raise ValueError("seed must be non-negative")
        return v


def load_config(
    project_config_path: Optional[Path] = None,
    global_config_path: Optional[Path] = None,
) -> GameConfig:
    """Load the game configuration.

    The user-wide file is read first, then the project file, which wins on
    conflicting keys. Nested sections such as ``logging`` merge key by key.
    Either path may be given explicitly; missing files are skipped.

    Raises:
        ConfigurationError: If a file is unreadable or the result is invalid
    """
    sources = [
        global_config_path or _user_config_file(),
        project_config_path or _find_project_config_file(),
    ]

    settings: Dict[str, Any] = {}
    for path in sources:
        if path is not None and path.exists():
            settings = _deep_merge(settings, _read_settings(path))

    try:
        return GameConfig(**settings)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


def _user_config_file() -> Path:
    config_home = os.getenv("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _find_project_config_file() -> Optional[Path]:
    """Nearest ``.tictactoe/config.yaml`` from the working directory upwards."""
    cwd = Path.cwd()
    for directory in (cwd, *cwd.parents):
        if (directory / PROJECT_DIR_NAME).is_dir():
            return directory / PROJECT_DIR_NAME / CONFIG_FILE_NAME
    return None


def _read_settings(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{path} must contain a YAML object, got {type(data).__name__}"
        )
    return data


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            value = _deep_merge(merged[key], value)
        merged[key] = value
    return merged
