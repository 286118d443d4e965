"""Test helpers and utilities.

This module provides shared utilities for testing:
- builders: Test data builders for skills, manifests and tools
"""

from tests.helpers.builders import build_manifest, build_skill, build_tool

__all__ = [
    "build_manifest",
    "build_skill",
    "build_tool",
]
