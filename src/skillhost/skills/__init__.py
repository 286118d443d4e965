"""Skill subsystem for skillhost.

This module provides the skill manifest model, manifest parsing, an
in-memory skill registry, lifecycle operations, tool conversion and
dispatch, prompt synthesis and the remote catalog sync policy.

Example:
    >>> from skillhost.skills import SkillLoader, SkillRegistry, skills_to_system_prompt
    >>> registry = SkillRegistry()
    >>> loader = SkillLoader(registry)
    >>> result = loader.load_from_directory(Path("workspace/skills"))
    >>> prompt = skills_to_system_prompt(registry.list())
"""

from skillhost.skills.catalog import (
    clone_catalog,
    get_catalog_dir,
    mark_synced,
    pull_catalog,
    should_sync,
    sync_catalog,
)
from skillhost.skills.errors import (
    SkillAlreadyExistsError,
    SkillCatalogError,
    SkillError,
    SkillFileNotFoundError,
    SkillInvalidArgumentError,
    SkillManifestError,
    SkillNotFoundError,
    SkillNotImplementedError,
    SkillReadError,
    SkillRegistryError,
    SkillToolExecutionError,
    SkillToolRegistrationError,
    SkillValidationError,
)
from skillhost.skills.loader import SkillLoader, SkillScanResult
from skillhost.skills.manifest import Skill, SkillManifest, SkillTool, SkillToolArgument, ToolKind
from skillhost.skills.parser import ManifestFormat, detect_format, parse_manifest
from skillhost.skills.prompt import (
    manifest_to_prompt,
    registry_to_system_prompt,
    skills_to_system_prompt,
)
from skillhost.skills.registry import SkillRegistry
from skillhost.skills.tools import (
    ExtensionToolDefinition,
    ExtensionToolType,
    HostToolRegistrar,
    SkillToolExecutor,
    ToolResult,
    register_skill_tools,
    skill_tool_to_extension,
)
from skillhost.skills.validation import validate_manifest, validate_skill

__all__ = [
    # Errors
    "SkillError",
    "SkillInvalidArgumentError",
    "SkillNotFoundError",
    "SkillAlreadyExistsError",
    "SkillFileNotFoundError",
    "SkillReadError",
    "SkillManifestError",
    "SkillValidationError",
    "SkillNotImplementedError",
    "SkillRegistryError",
    "SkillToolExecutionError",
    "SkillToolRegistrationError",
    "SkillCatalogError",
    # Model
    "Skill",
    "SkillManifest",
    "SkillTool",
    "SkillToolArgument",
    "ToolKind",
    # Parsing and validation
    "ManifestFormat",
    "detect_format",
    "parse_manifest",
    "validate_manifest",
    "validate_skill",
    # Registry and lifecycle
    "SkillRegistry",
    "SkillLoader",
    "SkillScanResult",
    # Tools
    "ExtensionToolDefinition",
    "ExtensionToolType",
    "HostToolRegistrar",
    "SkillToolExecutor",
    "ToolResult",
    "register_skill_tools",
    "skill_tool_to_extension",
    # Prompts
    "manifest_to_prompt",
    "skills_to_system_prompt",
    "registry_to_system_prompt",
    # Catalog
    "get_catalog_dir",
    "should_sync",
    "mark_synced",
    "clone_catalog",
    "pull_catalog",
    "sync_catalog",
]
