"""Configuration file manager for loading, saving, and merging skillhost settings."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from .constants import ENV_CATALOG_DIR, ENV_LOG_LEVEL, ENV_TOOL_TIMEOUT
from .schema import SkillsSettings

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when configuration operations fail."""

    pass


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Returns:
        Path to ~/.skillhost/settings.json
    """
    return Path.home() / ".skillhost" / "settings.json"


def load_config(config_path: Path | None = None) -> SkillsSettings:
    """Load configuration from JSON file.

    Args:
        config_path: Optional path to config file. Defaults to ~/.skillhost/settings.json

    Returns:
        SkillsSettings loaded from file, or default settings if the file doesn't exist

    Raises:
        ConfigurationError: If file exists but is invalid JSON or fails validation

    Example:
        >>> settings = load_config()
        >>> settings.workspace_dir
        'workspace/skills'
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return SkillsSettings()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
        return SkillsSettings(**data)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in configuration file {config_path}: {e}") from e
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed for {config_path}:\n{e}") from e
    except (OSError, TypeError) as e:
        raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}") from e


def save_config(settings: SkillsSettings, config_path: Path | None = None) -> None:
    """Save configuration to JSON file.

    Args:
        settings: SkillsSettings instance to save
        config_path: Optional path to config file. Defaults to ~/.skillhost/settings.json

    Raises:
        ConfigurationError: If save operation fails
    """
    if config_path is None:
        config_path = get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(settings.model_dump_json_pretty())
    except OSError as e:
        raise ConfigurationError(f"Failed to save configuration to {config_path}: {e}") from e


def merge_with_env(settings: SkillsSettings, load_env_file: bool = True) -> SkillsSettings:
    """Apply environment variable overrides to file settings.

    Environment variables take precedence over file settings. A ``.env`` file
    in the working directory is loaded first (existing variables win).

    Args:
        settings: SkillsSettings instance from file
        load_env_file: Load ``.env`` before reading the environment

    Returns:
        New SkillsSettings with overrides applied

    Raises:
        ConfigurationError: If an override value is invalid

    Example:
        >>> settings = merge_with_env(load_config())
    """
    if load_env_file:
        load_dotenv(find_dotenv(usecwd=True))

    overrides: dict[str, Any] = {}

    catalog_dir = os.getenv(ENV_CATALOG_DIR)
    if catalog_dir:
        overrides["catalog_dir"] = catalog_dir

    tool_timeout = os.getenv(ENV_TOOL_TIMEOUT)
    if tool_timeout:
        try:
            overrides["tool_timeout"] = float(tool_timeout)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid {ENV_TOOL_TIMEOUT} value '{tool_timeout}': must be a number"
            ) from e

    log_level = os.getenv(ENV_LOG_LEVEL)
    if log_level:
        overrides["log_level"] = log_level

    if not overrides:
        return settings

    logger.debug(f"Applying environment overrides: {sorted(overrides)}")
    try:
        return SkillsSettings(**{**settings.model_dump(), **overrides})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment override:\n{e}") from e
