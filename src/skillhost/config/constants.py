"""Configuration constants for skillhost.

Single source of truth for default configuration values. Kept apart from
schema.py and manager.py to avoid circular imports.
"""

from pathlib import Path

# Default paths
DEFAULT_CONFIG_DIR = Path.home() / ".skillhost"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "settings.json"
DEFAULT_PROJECT_SKILL_DIR = ".skillhost/skills"
DEFAULT_WORKSPACE_SKILL_DIR = "workspace/skills"
DEFAULT_CATALOG_DIR = ".skillhost/open-skills"

# Catalog
DEFAULT_CATALOG_URL = "https://github.com/besoeasy/open-skills"

# Tool execution
DEFAULT_TOOL_TIMEOUT = 60

# Logging
DEFAULT_LOG_LEVEL = "WARNING"

# Environment variables
ENV_CATALOG_DIR = "SKILLHOST_OPEN_SKILLS_DIR"
ENV_TOOL_TIMEOUT = "SKILLHOST_TOOL_TIMEOUT"
ENV_LOG_LEVEL = "SKILLHOST_LOG_LEVEL"
