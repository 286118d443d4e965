"""Informational dump of skills and registries.

Rendering never fails: missing fields render as a placeholder and text is
printed without Rich markup so manifest content like ``[skill]`` is shown
verbatim.
"""

from rich.console import Console
from rich.text import Text

from skillhost.skills.manifest import Skill
from skillhost.skills.registry import SkillRegistry

PLACEHOLDER = "(none)"


def _or_placeholder(value: object) -> str:
    if value is None:
        return PLACEHOLDER
    text = str(value)
    return text if text.strip() else PLACEHOLDER


def format_skill_info(skill: Skill | None) -> str:
    """Render a skill as indented plain text."""
    if skill is None:
        return "Skill: NULL"

    manifest = skill.manifest
    lines = [
        f"Skill: {_or_placeholder(manifest.name)}",
        f"  Description: {_or_placeholder(manifest.description)}",
        f"  Version: {_or_placeholder(manifest.version)}",
    ]

    if manifest.author:
        lines.append(f"  Author: {manifest.author}")
    if manifest.tags:
        lines.append(f"  Tags: {', '.join(manifest.tags)}")

    lines.append(f"  Tools: {len(manifest.tools)}")
    for tool in manifest.tools:
        lines.append(
            f"    - {_or_placeholder(tool.name)} ({_or_placeholder(tool.kind)}): "
            f"{_or_placeholder(tool.description)}"
        )

    lines.append(f"  Prompts: {len(manifest.prompts)}")
    lines.append(f"  Location: {_or_placeholder(manifest.location)}")
    lines.append(f"  Loaded: {'yes' if skill.loaded else 'no'}")
    if skill.loaded and skill.load_time is not None:
        lines.append(f"  Load time: {skill.load_time.strftime('%Y-%m-%d %H:%M:%S')}")

    return "\n".join(lines)


def format_registry(registry: SkillRegistry) -> str:
    """Render every registered skill, numbered in registration order."""
    skills = registry.list()
    lines = [f"Skill Registry ({len(skills)} skills)", "============================"]
    for number, skill in enumerate(skills, 1):
        lines.append(f"[{number}] {format_skill_info(skill)}")
        lines.append("")
    return "\n".join(lines)


def print_skill_info(skill: Skill | None, console: Console | None = None) -> None:
    """Print one skill to the console."""
    (console or Console()).print(Text(format_skill_info(skill)))


def print_registry(registry: SkillRegistry, console: Console | None = None) -> None:
    """Print every registered skill to the console."""
    (console or Console()).print(Text(format_registry(registry)))
