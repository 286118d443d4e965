"""Unit tests for prompt synthesis."""

from skillhost.skills.prompt import (
    manifest_to_prompt,
    registry_to_system_prompt,
    skills_to_system_prompt,
)
from tests.helpers.builders import build_manifest, build_skill, build_tool


class TestManifestToPrompt:
    """Test rendering a single manifest."""

    def test_header_and_description(self):
        """Should start with the skill heading and description."""
        prompt = manifest_to_prompt(build_manifest(name="web", description="Search the web"))
        assert prompt == "# Skill: web\n\nSearch the web\n\n"

    def test_tools_section(self):
        """Should list each tool under Available Tools."""
        manifest = build_manifest(
            name="web",
            description="d",
            tools=[build_tool(name="search", description="Run a search")],
        )

        prompt = manifest_to_prompt(manifest)

        assert "## Available Tools\n\n### search\nRun a search\n\n" in prompt
        assert "## Prompt Templates" not in prompt

    def test_prompt_templates_are_numbered(self):
        """Should number prompt templates from 1."""
        manifest = build_manifest(prompts=["first", "second"])

        prompt = manifest_to_prompt(manifest)

        assert prompt.endswith(
            "## Prompt Templates\n\n### Prompt 1\n\nfirst\n\n### Prompt 2\n\nsecond\n\n"
        )

    def test_deterministic(self):
        """Should render the same text every time."""
        manifest = build_manifest(tools=[build_tool()], prompts=["p"])
        assert manifest_to_prompt(manifest) == manifest_to_prompt(manifest)


class TestSystemPrompt:
    """Test rendering many skills."""

    def test_empty(self):
        """Should render only the heading when there are no skills."""
        assert skills_to_system_prompt([]) == "# Available Skills\n\n"

    def test_skips_unloaded_and_none(self):
        """Should render loaded skills in order, each followed by a rule."""
        skills = [
            build_skill(name="a", description="A"),
            None,
            build_skill(name="b", description="B", loaded=False),
            build_skill(name="c", description="C"),
        ]

        prompt = skills_to_system_prompt(skills)

        assert prompt == (
            "# Available Skills\n\n"
            "# Skill: a\n\nA\n\n\n---\n\n"
            "# Skill: c\n\nC\n\n\n---\n\n"
        )

    def test_registry_order(self, skill_registry):
        """Should follow registration order."""
        skill_registry.register(build_skill(name="z"))
        skill_registry.register(build_skill(name="a"))

        prompt = registry_to_system_prompt(skill_registry)

        assert prompt.index("# Skill: z") < prompt.index("# Skill: a")
