"""Test data builders for creating test fixtures.

This module provides builder functions for creating common test objects
with sensible defaults, making tests more readable and maintainable.
"""

from datetime import datetime
from typing import Any

from skillhost.skills.manifest import Skill, SkillManifest, SkillTool, SkillToolArgument


def build_tool(
    name: str = "greet",
    kind: str = "shell",
    command: str = "echo hi",
    args: dict[str, str] | None = None,
    **kwargs: Any,
) -> SkillTool:
    """Build a skill tool with sensible defaults.

    Example:
        >>> tool = build_tool()
        >>> tool = build_tool(name="fetch", kind="http", command="https://example.com")
    """
    return SkillTool(
        name=name,
        description=kwargs.pop("description", f"{name} tool"),
        kind=kind,
        command=command,
        args=[SkillToolArgument(key=key, value=value) for key, value in (args or {}).items()],
        **kwargs,
    )


def build_manifest(
    name: str = "test-skill",
    description: str = "A skill for testing",
    tools: list[SkillTool] | None = None,
    **kwargs: Any,
) -> SkillManifest:
    """Build a skill manifest with sensible defaults.

    Example:
        >>> manifest = build_manifest()
        >>> manifest = build_manifest(name="web", tools=[build_tool()])
    """
    return SkillManifest(name=name, description=description, tools=tools or [], **kwargs)


def build_skill(
    name: str = "test-skill",
    loaded: bool = True,
    **kwargs: Any,
) -> Skill:
    """Build a loaded skill wrapping a test manifest.

    Example:
        >>> skill = build_skill()
        >>> skill = build_skill(name="web", tools=[build_tool()])
    """
    return Skill(
        manifest=build_manifest(name=name, **kwargs),
        loaded=loaded,
        load_time=datetime.now() if loaded else None,
    )
