"""In-memory registry of loaded skills.

The registry owns every skill inserted into it: unregistering or shutting
down unloads the skill. Names are unique and matched exactly
(case-sensitive). Registration order is preserved.
"""

import logging
import threading
from collections.abc import Callable, Iterator

from skillhost.skills.errors import (
    SkillAlreadyExistsError,
    SkillInvalidArgumentError,
    SkillNotFoundError,
    SkillRegistryError,
    SkillValidationError,
)
from skillhost.skills.manifest import Skill
from skillhost.skills.validation import validate_skill

logger = logging.getLogger(__name__)


class SkillRegistry:
    """Ordered, thread-safe store of loaded skills keyed by unique name.

    A single re-entrant lock guards every operation, so concurrent agent
    sessions can share one registry.

    Example:
        >>> registry = SkillRegistry()
        >>> registry.register(skill)
        >>> registry.find("web-search") is skill
        True
        >>> registry.shutdown()
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._lock = threading.RLock()
        self._skills: list[Skill] = []
        self._initialized = False
        self.initialize()

    def initialize(self) -> None:
        """Open the registry. Idempotent."""
        with self._lock:
            if self._initialized:
                return
            self._skills = []
            self._initialized = True

    @property
    def initialized(self) -> bool:
        return self._initialized

    def shutdown(self) -> None:
        """Unload every skill and reset the registry to empty.

        Idempotent. Call ``initialize()`` to use the registry again.
        """
        with self._lock:
            if not self._initialized:
                return

            for skill in self._skills:
                skill.unload()

            count = len(self._skills)
            self._skills = []
            self._initialized = False

        logger.debug(f"Skill registry shut down ({count} skills unloaded)")

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise SkillRegistryError("Skill registry has been shut down")

    def _index_of(self, name: str) -> int | None:
        for index, skill in enumerate(self._skills):
            if skill.name == name:
                return index
        return None

    def register(self, skill: Skill) -> None:
        """Validate and register a skill.

        Args:
            skill: Loaded skill to add

        Raises:
            SkillInvalidArgumentError: If skill is None
            SkillValidationError: If the skill fails validation
            SkillAlreadyExistsError: If a skill with the same name is registered
            SkillRegistryError: If the registry has been shut down
        """
        if skill is None:
            raise SkillInvalidArgumentError("Cannot register skill: skill is None")

        validate_skill(skill)

        with self._lock:
            self._ensure_initialized()

            if self._index_of(skill.name) is not None:
                raise SkillAlreadyExistsError(f"Skill '{skill.name}' already exists in registry")

            self._skills.append(skill)

        logger.info(f"Registered skill '{skill.name}'")

    def unregister(self, name: str) -> Skill:
        """Remove, unload and return the named skill.

        The relative order of the remaining skills is preserved.

        Args:
            name: Exact skill name

        Returns:
            The removed (now unloaded) skill

        Raises:
            SkillNotFoundError: If no skill has this name
        """
        with self._lock:
            self._ensure_initialized()

            index = self._index_of(name)
            if index is None:
                raise SkillNotFoundError(f"Skill '{name}' not found in registry")

            skill = self._skills.pop(index)
            skill.unload()

        logger.info(f"Unregistered skill '{name}'")
        return skill

    def refresh(self, skill: Skill, rebuild: Callable[[Skill], None]) -> None:
        """Repopulate ``skill`` in place while holding the registry lock.

        ``rebuild`` replaces the skill's manifest. When the skill is a member
        of this registry, the result must validate and its name must not be
        taken by another entry; otherwise the skill is unloaded and the error
        propagates. Skills outside the registry are rebuilt without checks.

        Raises:
            SkillValidationError: If the rebuilt skill is invalid
            SkillAlreadyExistsError: If another entry already uses the new name
        """
        with self._lock:
            rebuild(skill)

            if not any(entry is skill for entry in self._skills):
                return

            try:
                validate_skill(skill)
            except SkillValidationError:
                skill.unload()
                raise

            if any(entry is not skill and entry.name == skill.name for entry in self._skills):
                name = skill.name
                skill.unload()
                raise SkillAlreadyExistsError(f"Skill '{name}' already exists in registry")

    def find(self, name: str) -> Skill:
        """Find a skill by exact, case-sensitive name.

        Raises:
            SkillNotFoundError: If skill not found
        """
        skill = self.get(name)
        if skill is None:
            raise SkillNotFoundError(f"Skill '{name}' not found in registry")
        return skill

    def get(self, name: str) -> Skill | None:
        """Find a skill by exact name, returning None when absent."""
        with self._lock:
            index = self._index_of(name)
            return None if index is None else self._skills[index]

    def exists(self, name: str) -> bool:
        """Check if a skill with this exact name is registered."""
        return self.get(name) is not None

    def list(self) -> tuple[Skill, ...]:
        """Snapshot of registered skills in registration order.

        The tuple is a copy; mutating registry membership goes through
        ``register``/``unregister`` only.
        """
        with self._lock:
            return tuple(self._skills)

    def loaded_skills(self) -> tuple[Skill, ...]:
        """Snapshot of registered skills whose ``loaded`` flag is set."""
        return tuple(skill for skill in self.list() if skill.loaded)

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._skills)

    def __len__(self) -> int:
        return self.count

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.exists(name)

    def __iter__(self) -> Iterator[Skill]:
        return iter(self.list())
