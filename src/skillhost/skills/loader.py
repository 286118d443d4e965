"""Skill loader for discovering and loading skills.

This module handles the skill lifecycle: loading a single skill file,
best-effort bulk loading from a directory, unload/reload, validation and
registration into a ``SkillRegistry``.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from skillhost.skills.catalog import get_catalog_dir
from skillhost.skills.errors import (
    SkillError,
    SkillFileNotFoundError,
    SkillInvalidArgumentError,
    SkillReadError,
)
from skillhost.skills.manifest import Skill, SkillManifest
from skillhost.skills.parser import SKILL_FILE_SUFFIXES, parse_manifest
from skillhost.skills.registry import SkillRegistry
from skillhost.skills.validation import validate_skill

logger = logging.getLogger(__name__)

# A subdirectory is a skill bundle if it directly contains this file
SKILL_BUNDLE_MANIFEST = "SKILL.toml"


@dataclass
class SkillScanResult:
    """Outcome of a best-effort directory scan.

    ``skills`` holds every skill that was loaded and registered; ``errors``
    holds a ``(path, error)`` pair for every candidate that was skipped.
    """

    skills: list[Skill] = field(default_factory=list)
    errors: list[tuple[Path, SkillError]] = field(default_factory=list)

    @property
    def names(self) -> list[str]:
        return [skill.name for skill in self.skills]

    def extend(self, other: "SkillScanResult") -> None:
        self.skills.extend(other.skills)
        self.errors.extend(other.errors)

    def __len__(self) -> int:
        return len(self.skills)

    def __iter__(self) -> Iterator[Skill]:
        return iter(self.skills)


class SkillLoader:
    """Load, reload and register skills.

    Each loader works against an explicit registry; when none is given a
    fresh one is created.

    Example:
        >>> loader = SkillLoader(SkillRegistry())
        >>> result = loader.load_from_directory(Path("workspace/skills"))
        >>> result.names
        ['alpha', 'beta']
    """

    def __init__(self, registry: SkillRegistry | None = None):
        """Initialize skill loader.

        Args:
            registry: Registry that loaded skills are inserted into
        """
        self.registry = registry if registry is not None else SkillRegistry()

    def _read_manifest_into(self, skill: Skill, path: Path) -> None:
        """Parse ``path`` and populate ``skill`` in place.

        The skill is only touched once the manifest is fully parsed, so a
        failure never leaves a partially populated skill behind.
        """
        if not path.exists():
            raise SkillFileNotFoundError(f"Skill file not found: {path}")

        try:
            content = path.read_bytes()
        except OSError as e:
            raise SkillReadError(f"Failed to read skill file {path}: {e}") from e

        manifest = parse_manifest(content, path)
        manifest.location = str(path)

        skill.manifest = manifest
        skill.loaded = True
        skill.load_time = datetime.now()

    def load(self, path: Path | str) -> Skill:
        """Load a single skill file.

        Does not register the skill.

        Args:
            path: Path to a .toml, .md or .json skill file

        Returns:
            Loaded skill with ``location`` and ``load_time`` stamped

        Raises:
            SkillFileNotFoundError: If the path does not exist
            SkillReadError: If the file cannot be read
            SkillManifestError: If the manifest is malformed
        """
        if path is None:
            raise SkillInvalidArgumentError("Cannot load skill: path is None")

        path = Path(path)
        skill = Skill(manifest=SkillManifest())
        self._read_manifest_into(skill, path)

        logger.debug(f"Loaded skill '{skill.name}' from {path}")
        return skill

    def _resolve_candidate(self, entry: Path) -> Path | None:
        """Return the file to load for a directory entry, or None to skip it."""
        if entry.is_dir():
            bundle_manifest = entry / SKILL_BUNDLE_MANIFEST
            if bundle_manifest.is_file():
                return bundle_manifest
            return None

        if entry.is_file() and entry.name.endswith(SKILL_FILE_SUFFIXES):
            return entry

        return None

    def load_from_directory(self, directory: Path | str) -> SkillScanResult:
        """Load and register every skill directly inside a directory.

        Candidates are files with a recognized suffix and subdirectories
        containing SKILL.toml. The scan is not recursive. A candidate that
        fails to load, validate or register is recorded in
        ``SkillScanResult.errors`` and skipped.

        Args:
            directory: Directory to scan

        Returns:
            SkillScanResult with loaded skills and per-path errors

        Raises:
            SkillFileNotFoundError: If the directory does not exist
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise SkillFileNotFoundError(f"Skill directory not found: {directory}")

        result = SkillScanResult()

        for entry in sorted(directory.iterdir()):
            candidate = self._resolve_candidate(entry)
            if candidate is None:
                continue

            try:
                skill = self.load(candidate)
                self.registry.register(skill)
            except SkillError as e:
                logger.warning(f"Skipping skill at {candidate}: {e}")
                result.errors.append((candidate, e))
                continue

            result.skills.append(skill)

        logger.info(
            f"Loaded {len(result.skills)} skills from {directory} "
            f"({len(result.errors)} skipped)"
        )
        return result

    def load_skill_sources(self, directories: Iterable[Path | str]) -> SkillScanResult:
        """Scan several skill directories in order, skipping missing ones."""
        combined = SkillScanResult()
        for directory in directories:
            directory = Path(directory)
            if not directory.is_dir():
                logger.debug(f"Skill directory does not exist, skipping: {directory}")
                continue
            combined.extend(self.load_from_directory(directory))
        return combined

    def load_catalog_skills(self, catalog_dir: Path | str | None = None) -> SkillScanResult:
        """Load skills from the local catalog mirror.

        Catalog skills are ordinary skills; there is no special handling
        beyond the directory location.

        Args:
            catalog_dir: Mirror directory (defaults to ``get_catalog_dir()``)
        """
        directory = Path(catalog_dir) if catalog_dir is not None else get_catalog_dir()
        if not directory.is_dir():
            logger.warning(f"Skill catalog mirror not found at {directory}")
            return SkillScanResult()

        return self.load_from_directory(directory)

    def unload(self, skill: Skill) -> None:
        """Release a skill's manifest and clear its lifecycle state.

        Raises:
            SkillInvalidArgumentError: If skill is None
        """
        if skill is None:
            raise SkillInvalidArgumentError("Cannot unload skill: skill is None")
        skill.unload()

    def reload(self, skill: Skill) -> Skill:
        """Unload a skill and load it again from its recorded location.

        The same ``Skill`` object is repopulated. If the re-load fails the
        skill stays unloaded and the error propagates. A skill registered in
        this loader's registry is reloaded under the registry lock and must
        stay valid and keep a name no other registered skill uses.

        Raises:
            SkillInvalidArgumentError: If skill is None, not loaded, or has no location
            SkillAlreadyExistsError: If the new name belongs to another registered skill
            SkillValidationError: If the reloaded registered skill is invalid
        """
        if skill is None or not skill.loaded:
            raise SkillInvalidArgumentError("Cannot reload skill: skill is not loaded")

        location = skill.location
        if not location:
            raise SkillInvalidArgumentError(f"Cannot reload skill '{skill.name}': no location")

        def rebuild(target: Skill) -> None:
            target.unload()
            self._read_manifest_into(target, Path(location))

        self.registry.refresh(skill, rebuild)

        logger.info(f"Reloaded skill '{skill.name}' from {location}")
        return skill

    def validate(self, skill: Skill) -> None:
        """Validate a skill (read-only).

        Raises:
            SkillValidationError: If the skill is invalid
        """
        validate_skill(skill)

    def register(self, skill: Skill) -> None:
        """Validate and register a skill in this loader's registry."""
        self.registry.register(skill)

    def unregister(self, name: str) -> Skill:
        """Remove and unload a skill from this loader's registry."""
        return self.registry.unregister(name)
