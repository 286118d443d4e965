"""Custom exceptions for skill subsystem.

This module defines a hierarchy of domain-specific exceptions for the
skill manifest, registry and tool dispatch layers.

Exception Hierarchy:
    SkillError (base)
    ├── SkillInvalidArgumentError
    ├── SkillNotFoundError
    ├── SkillAlreadyExistsError
    ├── SkillFileNotFoundError
    ├── SkillReadError
    ├── SkillManifestError
    ├── SkillValidationError
    ├── SkillNotImplementedError
    ├── SkillRegistryError
    ├── SkillToolExecutionError
    ├── SkillToolRegistrationError
    └── SkillCatalogError
"""


class SkillError(Exception):
    """Base exception for all skill-related errors.

    All custom exceptions in the skill subsystem inherit from this base class,
    allowing for catch-all error handling when needed.

    Example:
        >>> try:
        ...     # some skill operation
        ...     pass
        ... except SkillError as e:
        ...     print(f"Skill error: {e}")
    """

    pass


class SkillInvalidArgumentError(SkillError):
    """Missing or malformed input to a skill operation.

    Raised for ``None`` skills, executing tools on an unloaded skill, or
    reloading a skill that is not loaded.
    """

    pass


class SkillNotFoundError(SkillError):
    """Skill or tool not found.

    Example:
        >>> raise SkillNotFoundError("Skill 'web-search' not found in registry")
    """

    pass


class SkillAlreadyExistsError(SkillError):
    """A skill with the same name is already registered.

    Example:
        >>> raise SkillAlreadyExistsError("Skill 'web-search' already exists")
    """

    pass


class SkillFileNotFoundError(SkillError):
    """Skill file or directory does not exist."""

    pass


class SkillReadError(SkillError):
    """Skill file exists but could not be read."""

    pass


class SkillManifestError(SkillError):
    """Skill manifest parsing errors.

    Raised when a manifest is malformed: invalid TOML, JSON or YAML front
    matter, or bytes that are not UTF-8.

    Example:
        >>> raise SkillManifestError("Invalid TOML in SKILL.toml: line 3")
    """

    pass


class SkillValidationError(SkillError):
    """Manifest or tool fails required-field or kind-specific checks.

    Example:
        >>> raise SkillValidationError("Tool 'run' has kind 'shell' but no command")
    """

    pass


class SkillNotImplementedError(SkillError):
    """Tool kind is recognized but has no execution strategy."""

    pass


class SkillRegistryError(SkillError):
    """Registry used after shutdown."""

    pass


class SkillToolExecutionError(SkillError):
    """Tool could not be dispatched at all.

    A command that runs and fails is not an error; it is reported through
    ``ToolResult.success``. This is raised only when the execution
    capability itself cannot be invoked.
    """

    pass


class SkillToolRegistrationError(SkillError):
    """Host rejected a tool definition during registration."""

    pass


class SkillCatalogError(SkillError):
    """Remote skill catalog clone or pull failed."""

    pass
