"""Configuration package for skillhost."""

from .manager import (
    ConfigurationError,
    get_config_path,
    load_config,
    merge_with_env,
    save_config,
)
from .schema import SkillsSettings

__all__ = [
    # Schema
    "SkillsSettings",
    # Manager
    "ConfigurationError",
    "get_config_path",
    "load_config",
    "save_config",
    "merge_with_env",
]
