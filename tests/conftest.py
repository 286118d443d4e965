"""Shared test fixtures for all tests.

This file imports and re-exports fixtures from the fixtures/ module so that
every test can use them without explicit imports.
"""

from tests.fixtures.config import isolated_home, skills_settings  # noqa: F401
from tests.fixtures.skills import (  # noqa: F401
    sample_skill,
    skill_dir,
    skill_loader,
    skill_registry,
)
