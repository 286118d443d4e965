"""Manifest parsing for structured, narrative and JSON skill files.

Three input formats are recognized:

- Structured (SKILL.toml): a ``[skill]`` table plus ``[[tools]]`` table array.
- Narrative (Markdown): the name comes from the file name (or YAML front
  matter), the description is the first body line that is not a heading.
- JSON (skill.json): the structured field contract expressed as JSON.

Parsers always return a best-effort ``SkillManifest``. Empty ``name`` or
``description`` is not a parse error; validation is layered on top.
"""

import json
import logging
import re
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from skillhost.skills.errors import SkillManifestError
from skillhost.skills.manifest import SkillManifest, SkillTool, SkillToolArgument

logger = logging.getLogger(__name__)

STRUCTURED_SUFFIX = ".toml"
NARRATIVE_SUFFIX = ".md"
JSON_SUFFIX = ".json"
SKILL_FILE_SUFFIXES = (STRUCTURED_SUFFIX, NARRATIVE_SUFFIX, JSON_SUFFIX)

# A document is structured only if it literally contains this marker
SKILL_SECTION_MARKER = "[skill]"

DEFAULT_VERSION = "0.1.0"


class ManifestFormat(str, Enum):
    """Recognized manifest formats."""

    STRUCTURED = "structured"
    NARRATIVE = "narrative"
    JSON = "json"


def detect_format(source: str | Path, content: str) -> ManifestFormat:
    """Decide how a skill source should be parsed.

    Args:
        source: File name or path the content came from
        content: Decoded file content

    Returns:
        JSON for ``.json`` names, STRUCTURED if the name ends in ``.toml`` or
        the content contains the ``[skill]`` marker, NARRATIVE otherwise.

    Examples:
        >>> detect_format("SKILL.toml", "")
        <ManifestFormat.STRUCTURED: 'structured'>
        >>> detect_format("notes.md", "# Notes")
        <ManifestFormat.NARRATIVE: 'narrative'>
    """
    name = str(source)
    if name.endswith(JSON_SUFFIX):
        return ManifestFormat.JSON
    if name.endswith(STRUCTURED_SUFFIX) or SKILL_SECTION_MARKER in content:
        return ManifestFormat.STRUCTURED
    return ManifestFormat.NARRATIVE


def _as_str(value: Any) -> str:
    """Coerce a parsed scalar (or list) into the string form stored on models."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return " ".join(_as_str(item) for item in value)
    return str(value)


def _as_str_list(value: Any, field: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [_as_str(item) for item in value]
    raise SkillManifestError(f"Field '{field}' must be a string or an array of strings")


def _parse_tool_args(raw: Any, tool_name: str) -> list[SkillToolArgument]:
    if raw is None:
        return []

    if isinstance(raw, dict):
        return [SkillToolArgument(key=str(key), value=_as_str(value)) for key, value in raw.items()]

    if isinstance(raw, list):
        # JSON manifests may spell args as [{"key": ..., "value": ...}, ...]
        args = []
        for item in raw:
            if not isinstance(item, dict) or "key" not in item:
                raise SkillManifestError(
                    f"Tool '{tool_name}' args must be a table or a list of key/value pairs"
                )
            args.append(SkillToolArgument(key=str(item["key"]), value=_as_str(item.get("value"))))
        return args

    raise SkillManifestError(f"Tool '{tool_name}' args must be a table of key/value pairs")


def _parse_tools(raw: Any) -> list[SkillTool]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise SkillManifestError("Field 'tools' must be an array of tables")

    tools = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise SkillManifestError("Each entry in 'tools' must be a table")
        name = _as_str(entry.get("name"))
        tools.append(
            SkillTool(
                name=name,
                description=_as_str(entry.get("description")),
                kind=_as_str(entry.get("kind")),
                command=_as_str(entry.get("command")),
                args=_parse_tool_args(entry.get("args"), name),
            )
        )
    return tools


def _manifest_from_mapping(data: dict[str, Any]) -> SkillManifest:
    """Build a manifest from a parsed key/value tree.

    Fields are read from the ``skill`` table when present, otherwise from
    the top level. Tools and prompts may live in either place.
    """
    skill_table = data.get("skill")
    if skill_table is None:
        skill_table = data
    elif not isinstance(skill_table, dict):
        raise SkillManifestError("Section 'skill' must be a table")

    tools_raw = data.get("tools")
    if tools_raw is None:
        tools_raw = skill_table.get("tools")

    prompts_raw = skill_table.get("prompts")
    if prompts_raw is None:
        prompts_raw = data.get("prompts")

    author = _as_str(skill_table.get("author")) or None

    return SkillManifest(
        name=_as_str(skill_table.get("name")),
        description=_as_str(skill_table.get("description")),
        version=_as_str(skill_table.get("version")) or DEFAULT_VERSION,
        author=author,
        tags=_as_str_list(skill_table.get("tags"), "tags"),
        tools=_parse_tools(tools_raw),
        prompts=_as_str_list(prompts_raw, "prompts"),
    )


def parse_toml_manifest(text: str) -> SkillManifest:
    """Parse a structured (TOML) manifest.

    Args:
        text: SKILL.toml content

    Returns:
        Best-effort SkillManifest

    Raises:
        SkillManifestError: If the TOML is malformed or fields have the wrong shape
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise SkillManifestError(f"Invalid TOML manifest: {e}") from e

    return _manifest_from_mapping(data)


def parse_json_manifest(text: str) -> SkillManifest:
    """Parse a JSON manifest (same field contract as TOML).

    Raises:
        SkillManifestError: If the JSON is malformed or not an object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SkillManifestError(f"Invalid JSON manifest: {e}") from e

    if not isinstance(data, dict):
        raise SkillManifestError("JSON manifest must be an object")

    return _manifest_from_mapping(data)


def extract_yaml_frontmatter(content: str) -> tuple[dict[str, Any] | None, str]:
    """Split optional YAML front matter from a Markdown document.

    SKILL.md format:
    ```
    ---
    name: skill-name
    description: Brief description
    ---

    # Markdown instructions...
    ```

    Args:
        content: Full Markdown content

    Returns:
        Tuple of (yaml_data or None when there is no front matter, markdown_body)

    Raises:
        SkillManifestError: If front matter is present but malformed
    """
    pattern = r"^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n(.*))?\Z"
    match = re.match(pattern, content, re.DOTALL)

    if not match:
        return None, content

    yaml_content = match.group(1)
    body = match.group(2) or ""

    try:
        yaml_data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise SkillManifestError(f"Invalid YAML front matter: {e}") from e

    if yaml_data is None:
        yaml_data = {}
    if not isinstance(yaml_data, dict):
        raise SkillManifestError("YAML front matter must be a dictionary")

    return yaml_data, body


def first_body_line(text: str) -> str:
    """Return the first non-empty line that is not a Markdown heading."""
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            return stripped
    return ""


def parse_markdown_manifest(text: str, skill_name: str) -> SkillManifest:
    """Parse a narrative (Markdown) skill document.

    No tools or prompts are extracted. When the document carries YAML front
    matter, its name/description/version/author/tags take precedence.

    Args:
        text: Markdown content
        skill_name: Name supplied by the caller (usually the file stem)

    Returns:
        Best-effort SkillManifest

    Raises:
        SkillManifestError: If YAML front matter is malformed
    """
    front_matter, body = extract_yaml_frontmatter(text)

    if front_matter is None:
        return SkillManifest(name=skill_name, description=first_body_line(text))

    description = _as_str(front_matter.get("description")).strip() or first_body_line(body)

    return SkillManifest(
        name=_as_str(front_matter.get("name")) or skill_name,
        description=description,
        version=_as_str(front_matter.get("version")) or DEFAULT_VERSION,
        author=_as_str(front_matter.get("author")) or None,
        tags=_as_str_list(front_matter.get("tags"), "tags"),
    )


def skill_name_from_source(source: str | Path) -> str:
    """Derive a skill name from a file name by stripping its extension.

    Examples:
        >>> skill_name_from_source("/skills/web-search.md")
        'web-search'
    """
    return Path(source).stem


def parse_manifest(
    content: bytes | str, source: str | Path, fmt: ManifestFormat | None = None
) -> SkillManifest:
    """Parse raw manifest content into a SkillManifest.

    Args:
        content: Raw bytes (must be UTF-8) or decoded text
        source: File name or path, used for format detection and narrative names
        fmt: Explicit format; detected from ``source``/``content`` when None

    Returns:
        Best-effort SkillManifest (``location`` is not set here)

    Raises:
        SkillManifestError: If content is not UTF-8 or is malformed
    """
    if isinstance(content, bytes):
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SkillManifestError(f"Skill manifest must be UTF-8 encoded: {source}") from e
    else:
        text = content

    if fmt is None:
        fmt = detect_format(source, text)

    logger.debug(f"Parsing {source} as {fmt.value} manifest")

    if fmt is ManifestFormat.STRUCTURED:
        return parse_toml_manifest(text)
    if fmt is ManifestFormat.JSON:
        return parse_json_manifest(text)
    return parse_markdown_manifest(text, skill_name_from_source(source))
