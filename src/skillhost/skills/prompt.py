"""Prompt synthesis for skills.

Renders a skill manifest, or a set of skills, into Markdown text that the
host agent injects into its system prompt.
"""

from collections.abc import Iterable

from skillhost.skills.manifest import Skill, SkillManifest
from skillhost.skills.registry import SkillRegistry

SKILLS_HEADING = "# Available Skills\n\n"
SKILL_SEPARATOR = "\n---\n\n"


def manifest_to_prompt(manifest: SkillManifest) -> str:
    """Render one manifest as a Markdown prompt section.

    Layout:
        # Skill: <name>
        <description>
        ## Available Tools      (only when tools exist)
        ### <tool name> / <tool description>
        ## Prompt Templates     (only when prompts exist)
        ### Prompt <n> / <prompt text>

    Rendering is pure and deterministic.
    """
    parts = [f"# Skill: {manifest.name}\n\n", f"{manifest.description}\n\n"]

    if manifest.tools:
        parts.append("## Available Tools\n\n")
        for tool in manifest.tools:
            parts.append(f"### {tool.name}\n{tool.description}\n\n")

    if manifest.prompts:
        parts.append("## Prompt Templates\n\n")
        for number, prompt in enumerate(manifest.prompts, 1):
            parts.append(f"### Prompt {number}\n\n{prompt}\n\n")

    return "".join(parts)


def skills_to_system_prompt(skills: Iterable[Skill | None]) -> str:
    """Render every loaded skill into one system-prompt document.

    Skills are rendered in the order given; ``None`` entries and skills that
    are not loaded are skipped. Each rendered skill is followed by a
    horizontal rule.
    """
    parts = [SKILLS_HEADING]
    for skill in skills:
        if skill is None or not skill.loaded:
            continue
        parts.append(manifest_to_prompt(skill.manifest))
        parts.append(SKILL_SEPARATOR)
    return "".join(parts)


def registry_to_system_prompt(registry: SkillRegistry) -> str:
    """Render every loaded skill in a registry, in registration order."""
    return skills_to_system_prompt(registry.list())
