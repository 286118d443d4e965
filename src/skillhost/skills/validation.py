"""Validation for skill manifests and tools.

Validation is read-only: it never mutates the skill it inspects.
"""

from skillhost.skills.errors import SkillInvalidArgumentError, SkillValidationError
from skillhost.skills.manifest import Skill, SkillManifest, ToolKind


def check_manifest(manifest: SkillManifest) -> list[str]:
    """Collect every validation problem in a manifest.

    Args:
        manifest: Manifest to inspect

    Returns:
        List of human-readable problems (empty when valid)

    Examples:
        >>> check_manifest(SkillManifest(name="ok", description="fine"))
        []
        >>> check_manifest(SkillManifest(name="", description="fine"))
        ["Missing required field 'name'"]
    """
    problems = []

    if not manifest.name.strip():
        problems.append("Missing required field 'name'")
    if not manifest.description.strip():
        problems.append("Missing required field 'description'")

    seen_tools: set[str] = set()
    for index, tool in enumerate(manifest.tools, 1):
        label = f"'{tool.name}'" if tool.name else f"#{index}"

        if not tool.name.strip():
            problems.append(f"Tool {label}: missing required field 'name'")
        elif tool.name in seen_tools:
            problems.append(f"Tool {label}: duplicate tool name")
        else:
            seen_tools.add(tool.name)

        if not tool.description.strip():
            problems.append(f"Tool {label}: missing required field 'description'")

        if not tool.kind.strip():
            problems.append(f"Tool {label}: missing required field 'kind'")
        elif not tool.is_known_kind:
            valid = ", ".join(sorted(ToolKind.values()))
            problems.append(f"Tool {label}: unknown kind '{tool.kind}' (expected one of: {valid})")
        elif tool.tool_kind is ToolKind.SHELL and not tool.command.strip():
            problems.append(f"Tool {label}: shell tools require a non-empty 'command'")

    return problems


def validate_manifest(manifest: SkillManifest) -> None:
    """Validate a manifest, raising on the first problem.

    Raises:
        SkillValidationError: If required fields are empty or a tool is invalid
    """
    problems = check_manifest(manifest)
    if problems:
        name = manifest.name or "<unnamed>"
        raise SkillValidationError(f"Skill '{name}' failed validation: {problems[0]}")


def check_skill(skill: Skill) -> list[str]:
    """Collect every validation problem in a skill's manifest."""
    if skill is None:
        raise SkillInvalidArgumentError("Cannot validate skill: skill is None")
    return check_manifest(skill.manifest)


def validate_skill(skill: Skill) -> None:
    """Validate a skill.

    Raises:
        SkillInvalidArgumentError: If skill is None
        SkillValidationError: If the manifest is invalid
    """
    if skill is None:
        raise SkillInvalidArgumentError("Cannot validate skill: skill is None")
    validate_manifest(skill.manifest)
