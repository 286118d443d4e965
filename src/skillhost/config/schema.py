"""Pydantic models for skillhost settings."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DEFAULT_CATALOG_DIR,
    DEFAULT_CATALOG_URL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PROJECT_SKILL_DIR,
    DEFAULT_TOOL_TIMEOUT,
    DEFAULT_WORKSPACE_SKILL_DIR,
)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _expand(path: str) -> str:
    if "~" in path:
        return str(Path(path).expanduser())
    return path


class SkillsSettings(BaseModel):
    """Root configuration model for skill discovery and execution."""

    version: str = "1.0"

    project_dir: str = Field(
        default=DEFAULT_PROJECT_SKILL_DIR,
        description="Per-project skill directory",
    )
    workspace_dir: str = Field(
        default=DEFAULT_WORKSPACE_SKILL_DIR,
        description="Per-workspace skill directory",
    )
    extra_dirs: list[str] = Field(
        default_factory=list,
        description="Additional skill directories, scanned after the defaults",
    )

    catalog_enabled: bool = Field(
        default=False,
        description="Scan the remote catalog mirror together with local directories",
    )
    catalog_dir: str = Field(
        default=DEFAULT_CATALOG_DIR,
        description="Local mirror directory for the remote skill catalog",
    )
    catalog_url: str = Field(
        default=DEFAULT_CATALOG_URL,
        description="Git URL of the remote skill catalog",
    )

    tool_timeout: float | None = Field(
        default=DEFAULT_TOOL_TIMEOUT,
        description="Timeout in seconds for shell and HTTP tools (None waits forever)",
    )
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Root log level")

    @field_validator("project_dir", "workspace_dir", "catalog_dir")
    @classmethod
    def expand_dir(cls, v: str) -> str:
        """Expand user home directory in paths."""
        return _expand(v)

    @field_validator("extra_dirs")
    @classmethod
    def expand_extra_dirs(cls, v: list[str]) -> list[str]:
        """Expand user home directory in extra paths."""
        return [_expand(path) for path in v]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}")
        return level

    @field_validator("tool_timeout")
    @classmethod
    def validate_tool_timeout(cls, v: float | None) -> float | None:
        """Reject non-positive timeouts."""
        if v is not None and v <= 0:
            raise ValueError("tool_timeout must be positive")
        return v

    def skill_directories(self) -> list[Path]:
        """Return skill directories in scan order.

        Project directory first, then workspace, then extra directories, then
        the catalog mirror when enabled. Duplicates are dropped.
        """
        candidates = [self.project_dir, self.workspace_dir, *self.extra_dirs]
        if self.catalog_enabled:
            candidates.append(self.catalog_dir)

        directories: list[Path] = []
        for candidate in candidates:
            path = Path(candidate)
            if path not in directories:
                directories.append(path)
        return directories

    def model_dump_json_pretty(self, **kwargs: Any) -> str:
        """Dump model to pretty-printed JSON string."""
        return self.model_dump_json(indent=2, **kwargs)
