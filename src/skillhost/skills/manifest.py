"""Skill manifest schema.

This module defines Pydantic models for skill manifests and the ``Skill``
instance that wraps a loaded manifest.

A structured manifest (SKILL.toml) follows this structure:
```toml
[skill]
name = "web-search"
description = "Search the web and summarize results"
version = "1.0.0"
author = "Jane Doe"
tags = ["web", "search"]
prompts = ["Always cite the URLs you used."]

[[tools]]
name = "search"
description = "Run a search query"
kind = "shell"
command = "ddgr --json"

[tools.args]
count = "5"
```
"""

import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ToolKind(str, Enum):
    """Closed set of tool kinds a skill may declare."""

    SHELL = "shell"
    HTTP = "http"
    BUILTIN = "builtin"
    SCRIPT = "script"
    CUSTOM = "custom"

    @classmethod
    def from_value(cls, value: str | None) -> "ToolKind":
        """Map a declared kind string to a ToolKind.

        Unrecognized or empty values map to CUSTOM so that serialized
        manifests with unknown kinds can still be loaded.

        Examples:
            >>> ToolKind.from_value("shell")
            <ToolKind.SHELL: 'shell'>
            >>> ToolKind.from_value("c_function")
            <ToolKind.CUSTOM: 'custom'>
        """
        try:
            return cls(value)
        except ValueError:
            return cls.CUSTOM

    @classmethod
    def values(cls) -> set[str]:
        return {kind.value for kind in cls}


class SkillToolArgument(BaseModel):
    """Default/templated key-value argument declared on a tool."""

    key: str
    value: str


class SkillTool(BaseModel):
    """One capability a skill exposes.

    ``kind`` keeps the raw declared string. Unknown kinds are accepted here
    and rejected by validation; ``tool_kind`` gives the dispatch enum.

    Example:
        >>> tool = SkillTool(name="hi", description="Say hi", kind="shell", command="echo hi")
        >>> tool.tool_kind
        <ToolKind.SHELL: 'shell'>
    """

    name: str = ""
    description: str = ""
    kind: str = ""
    command: str = ""
    args: list[SkillToolArgument] = Field(default_factory=list)

    @property
    def tool_kind(self) -> ToolKind:
        return ToolKind.from_value(self.kind)

    @property
    def is_known_kind(self) -> bool:
        return self.kind in ToolKind.values()

    def args_dict(self) -> dict[str, str]:
        """Return declared args as an ordered dict (later duplicates win)."""
        return {arg.key: arg.value for arg in self.args}


class SkillManifest(BaseModel):
    """Declarative description of a skill.

    The parser always returns a best-effort manifest, so ``name`` and
    ``description`` may be empty here. Required-field checks live in
    ``skillhost.skills.validation``.

    Example:
        >>> manifest = SkillManifest(name="web-search", description="Search the web")
        >>> manifest.version
        '0.1.0'
    """

    name: str = ""
    description: str = ""
    version: str = "0.1.0"
    author: str | None = None
    tags: list[str] = Field(default_factory=list)
    tools: list[SkillTool] = Field(default_factory=list)
    prompts: list[str] = Field(default_factory=list)
    location: str | None = None

    def get_tool(self, name: str) -> SkillTool | None:
        """Return the first tool with exactly this name, or None."""
        for tool in self.tools:
            if tool.name == name:
                return tool
        return None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready projection of the manifest.

        Tool args render as an object of key/value strings.
        """
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "author": self.author,
            "tags": list(self.tags),
            "tools": [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "kind": tool.kind,
                    "command": tool.command,
                    "args": tool.args_dict(),
                }
                for tool in self.tools
            ],
            "prompts": list(self.prompts),
            "location": self.location,
        }

    def to_json(self, indent: int | None = 2) -> str:
        """Render the manifest as JSON."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


@dataclass
class Skill:
    """A loaded, addressable instance of a manifest.

    ``user_data`` is opaque extension data; the core never inspects it.
    """

    manifest: SkillManifest
    loaded: bool = False
    load_time: datetime | None = None
    user_data: Any = None

    @property
    def name(self) -> str:
        return self.manifest.name

    @property
    def location(self) -> str | None:
        return self.manifest.location

    def unload(self) -> None:
        """Drop the manifest and clear lifecycle state."""
        self.manifest = SkillManifest()
        self.loaded = False
        self.load_time = None
