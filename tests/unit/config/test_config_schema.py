"""Unit tests for configuration schema."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from skillhost.config.schema import SkillsSettings


class TestSkillsSettings:
    """Test SkillsSettings model."""

    def test_defaults(self):
        """Should use the documented defaults."""
        settings = SkillsSettings()

        assert settings.project_dir == ".skillhost/skills"
        assert settings.workspace_dir == "workspace/skills"
        assert settings.catalog_dir == ".skillhost/open-skills"
        assert settings.catalog_url == "https://github.com/besoeasy/open-skills"
        assert settings.catalog_enabled is False
        assert settings.tool_timeout == 60
        assert settings.log_level == "WARNING"

    def test_expands_home(self):
        """Should expand ~ in directory settings."""
        settings = SkillsSettings(workspace_dir="~/skills", extra_dirs=["~/more"])

        assert settings.workspace_dir == str(Path.home() / "skills")
        assert settings.extra_dirs == [str(Path.home() / "more")]

    def test_log_level_normalized(self):
        """Should upper-case valid log levels."""
        assert SkillsSettings(log_level="info").log_level == "INFO"

    def test_invalid_log_level(self):
        """Should reject unknown log levels."""
        with pytest.raises(ValidationError):
            SkillsSettings(log_level="LOUD")

    def test_invalid_timeout(self):
        """Should reject non-positive timeouts."""
        with pytest.raises(ValidationError):
            SkillsSettings(tool_timeout=0)

    def test_timeout_can_be_disabled(self):
        """Should allow waiting forever."""
        assert SkillsSettings(tool_timeout=None).tool_timeout is None


class TestSkillDirectories:
    """Test skill directory ordering."""

    def test_default_order(self):
        """Should scan project then workspace directories."""
        assert SkillsSettings().skill_directories() == [
            Path(".skillhost/skills"),
            Path("workspace/skills"),
        ]

    def test_extra_and_catalog(self):
        """Should append extra directories and the enabled catalog without duplicates."""
        settings = SkillsSettings(
            extra_dirs=["/opt/skills", "workspace/skills"],
            catalog_enabled=True,
            catalog_dir="/var/open-skills",
        )

        assert settings.skill_directories() == [
            Path(".skillhost/skills"),
            Path("workspace/skills"),
            Path("/opt/skills"),
            Path("/var/open-skills"),
        ]
