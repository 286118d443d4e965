"""skillhost - Skill manifest, registry and tool dispatch for agent hosts."""

from importlib.metadata import PackageNotFoundError, version

# Read version from package metadata (pyproject.toml)
try:
    __version__ = version("skillhost")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "0.0.0.dev"

from skillhost.skills import Skill, SkillLoader, SkillManifest, SkillRegistry

__all__ = ["Skill", "SkillLoader", "SkillManifest", "SkillRegistry", "__version__"]
