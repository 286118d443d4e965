"""Unit tests for skill error classes."""

import pytest

from skillhost.skills import errors
from skillhost.skills.errors import (
    SkillAlreadyExistsError,
    SkillError,
    SkillManifestError,
    SkillNotFoundError,
)

ALL_ERRORS = [
    errors.SkillInvalidArgumentError,
    errors.SkillNotFoundError,
    errors.SkillAlreadyExistsError,
    errors.SkillFileNotFoundError,
    errors.SkillReadError,
    errors.SkillManifestError,
    errors.SkillValidationError,
    errors.SkillNotImplementedError,
    errors.SkillRegistryError,
    errors.SkillToolExecutionError,
    errors.SkillToolRegistrationError,
    errors.SkillCatalogError,
]


class TestSkillError:
    """Test base SkillError exception."""

    def test_skill_error_is_exception(self):
        """SkillError should inherit from Exception."""
        assert issubclass(SkillError, Exception)

    def test_skill_error_can_be_raised(self):
        """SkillError should be raisable with a message."""
        with pytest.raises(SkillError, match="test error"):
            raise SkillError("test error")


class TestErrorHierarchy:
    """Test that every skill error derives from SkillError."""

    @pytest.mark.parametrize("error_class", ALL_ERRORS)
    def test_inherits_from_skill_error(self, error_class):
        """Should be catchable as SkillError."""
        assert issubclass(error_class, SkillError)
        with pytest.raises(SkillError, match="boom"):
            raise error_class("boom")

    def test_kinds_are_distinct(self):
        """Should not alias one error kind to another."""
        assert not issubclass(SkillNotFoundError, SkillAlreadyExistsError)
        assert not issubclass(SkillManifestError, SkillNotFoundError)
