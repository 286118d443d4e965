"""Tool adapter and dispatcher for skill-declared tools.

Skill tools are converted into host tool definitions (``ExtensionToolDefinition``)
and registered with the host, or executed directly by kind:

- shell: run the command line through the system shell
- builtin: a small fixed set of in-process commands
- http: issue a GET request to the tool's URL
- script / custom: recognized, but no execution strategy (not implemented)

A command that runs and fails is a normal ``ToolResult`` with
``success=False``. Exceptions are reserved for cases where the tool could
not be dispatched at all.
"""

import logging
import shlex
import subprocess
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Protocol

import httpx
from pydantic import BaseModel, Field

from skillhost.skills.errors import (
    SkillInvalidArgumentError,
    SkillNotFoundError,
    SkillNotImplementedError,
    SkillToolExecutionError,
    SkillToolRegistrationError,
)
from skillhost.skills.manifest import Skill, SkillTool, ToolKind

logger = logging.getLogger(__name__)

ToolArgs = str | Mapping[str, Any] | None


class ExtensionToolType(str, Enum):
    """Tool types understood by the host extension layer."""

    SHELL = "shell"
    HTTP = "http"
    BUILTIN = "builtin"
    CUSTOM = "custom"


_KIND_TO_EXTENSION_TYPE = {
    ToolKind.SHELL: ExtensionToolType.SHELL,
    ToolKind.HTTP: ExtensionToolType.HTTP,
    ToolKind.BUILTIN: ExtensionToolType.BUILTIN,
}


def _empty_parameters() -> dict[str, Any]:
    return {"type": "object", "properties": {}}


class ExtensionToolDefinition(BaseModel):
    """Generic executable tool definition handed to the host."""

    name: str
    description: str
    type: ExtensionToolType
    command: str | None = None
    parameters: dict[str, Any] = Field(default_factory=_empty_parameters)


class ToolResult(BaseModel):
    """Outcome of executing a skill tool."""

    tool_name: str
    success: bool
    output: str = ""
    exit_code: int = 0


class HostToolRegistrar(Protocol):
    """Host capability: accept a tool definition.

    Implementations raise to signal that registration failed.
    """

    def register_tool(self, definition: ExtensionToolDefinition) -> None: ...


class ShellRunner(Protocol):
    """Run a shell command line and return (combined output, exit code)."""

    def __call__(self, command: str, timeout: float | None = None) -> tuple[str, int]: ...


def run_shell_command(command: str, timeout: float | None = None) -> tuple[str, int]:
    """Run ``command`` through the system shell.

    Args:
        command: Full command line
        timeout: Seconds before the process is killed (None waits forever)

    Returns:
        Tuple of (combined stdout/stderr, exit code)

    Raises:
        subprocess.TimeoutExpired: If the timeout elapses
        OSError: If the shell cannot be started
    """
    completed = subprocess.run(
        command,
        shell=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        timeout=timeout,
    )
    return completed.stdout or "", completed.returncode


def skill_tool_to_extension(tool: SkillTool) -> ExtensionToolDefinition:
    """Convert a skill tool into a host tool definition.

    Unrecognized kinds map to CUSTOM. Argument schema generation is not done
    here; ``parameters`` is always the empty object schema.

    Example:
        >>> definition = skill_tool_to_extension(
        ...     SkillTool(name="hi", description="Say hi", kind="shell", command="echo hi")
        ... )
        >>> definition.type
        <ExtensionToolType.SHELL: 'shell'>
    """
    if tool is None:
        raise SkillInvalidArgumentError("Cannot convert tool: tool is None")

    return ExtensionToolDefinition(
        name=tool.name,
        description=tool.description,
        type=_KIND_TO_EXTENSION_TYPE.get(tool.tool_kind, ExtensionToolType.CUSTOM),
        command=tool.command or None,
    )


def register_skill_tools(skill: Skill, host: HostToolRegistrar) -> list[ExtensionToolDefinition]:
    """Register every tool of a loaded skill with the host.

    Tools are registered in declaration order. The first host failure aborts
    the operation; tools registered before it stay registered.

    Args:
        skill: Loaded skill
        host: Host tool registration capability

    Returns:
        Definitions that were registered

    Raises:
        SkillInvalidArgumentError: If skill or host is None, or the skill is not loaded
        SkillToolRegistrationError: If the host rejects a tool
    """
    if skill is None or host is None or not skill.loaded:
        raise SkillInvalidArgumentError("Cannot register tools: skill is not loaded")

    registered = []
    for tool in skill.manifest.tools:
        definition = skill_tool_to_extension(tool)
        try:
            host.register_tool(definition)
        except Exception as e:
            raise SkillToolRegistrationError(
                f"Host rejected tool '{tool.name}' from skill '{skill.name}': {e}"
            ) from e
        registered.append(definition)

    logger.info(f"Registered {len(registered)} tools from skill '{skill.name}'")
    return registered


def build_shell_command(tool: SkillTool, args: ToolArgs = None) -> str:
    """Build the command line for a shell tool.

    A flat string is appended verbatim and replaces the tool's declared
    default args, which are then ignored. A mapping (or None) is merged over
    the declared default args: declared keys keep declaration order, extra
    keys follow in the caller's order, and each value is shell-quoted.

    Examples:
        >>> build_shell_command(SkillTool(kind="shell", command="echo"), "hi there")
        'echo hi there'
        >>> build_shell_command(SkillTool(kind="shell", command="echo"), {"msg": "hi there"})
        "echo 'hi there'"
    """
    command = tool.command

    if isinstance(args, str):
        return f"{command} {args}" if args else command

    values = tool.args_dict()
    if args:
        for key, value in args.items():
            values[str(key)] = "" if value is None else str(value)

    for value in values.values():
        command = f"{command} {shlex.quote(value)}"

    return command


def _describe_args(args: ToolArgs) -> str:
    if not args:
        return ""
    if isinstance(args, str):
        return args
    return " ".join(str(value) for value in args.values())


class SkillToolExecutor:
    """Execute skill tools by kind.

    Example:
        >>> executor = SkillToolExecutor(timeout=30)
        >>> result = executor.execute(skill, "greet")
        >>> result.success, result.output
        (True, 'hi\\n')
    """

    def __init__(
        self,
        shell_runner: ShellRunner | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ):
        """Initialize executor.

        Args:
            shell_runner: Shell execution capability (defaults to ``run_shell_command``)
            timeout: Caller-supplied timeout in seconds for shell and HTTP tools
            http_client: httpx client for HTTP tools (a short-lived one is used if None)
        """
        self.shell_runner = shell_runner or run_shell_command
        self.timeout = timeout
        self.http_client = http_client

        self._dispatch: dict[ToolKind, Callable[[SkillTool, ToolArgs], ToolResult]] = {
            ToolKind.SHELL: self._execute_shell,
            ToolKind.BUILTIN: self._execute_builtin,
            ToolKind.HTTP: self._execute_http,
        }

    def execute(self, skill: Skill, tool_name: str, args: ToolArgs = None) -> ToolResult:
        """Execute a tool declared by a loaded skill.

        Args:
            skill: Loaded skill declaring the tool
            tool_name: Exact tool name
            args: Flat argument string or structured key/value arguments

        Returns:
            ToolResult (``success=False`` when the command itself failed)

        Raises:
            SkillInvalidArgumentError: If skill is None or not loaded
            SkillNotFoundError: If the skill declares no tool with this name
            SkillNotImplementedError: If the tool kind has no execution strategy
            SkillToolExecutionError: If the execution capability cannot be invoked
        """
        if skill is None or not skill.loaded:
            raise SkillInvalidArgumentError("Cannot execute tool: skill is not loaded")

        tool = skill.manifest.get_tool(tool_name)
        if tool is None:
            raise SkillNotFoundError(f"Tool '{tool_name}' not found in skill '{skill.name}'")

        handler = self._dispatch.get(tool.tool_kind) if tool.is_known_kind else None
        if handler is None:
            raise SkillNotImplementedError(
                f"Unsupported tool kind '{tool.kind}' for tool '{tool.name}'"
            )

        logger.debug(f"Executing {tool.kind} tool '{tool.name}' from skill '{skill.name}'")
        return handler(tool, args)

    def _execute_shell(self, tool: SkillTool, args: ToolArgs) -> ToolResult:
        command = build_shell_command(tool, args)

        try:
            output, exit_code = self.shell_runner(command, timeout=self.timeout)
        except subprocess.TimeoutExpired:
            return ToolResult(
                tool_name=tool.name,
                success=False,
                output=f"Command timed out after {self.timeout}s",
                exit_code=-1,
            )
        except OSError as e:
            raise SkillToolExecutionError(f"Failed to run shell tool '{tool.name}': {e}") from e

        if exit_code != 0:
            logger.debug(f"Shell tool '{tool.name}' exited with code {exit_code}")

        return ToolResult(
            tool_name=tool.name,
            success=exit_code == 0,
            output=output,
            exit_code=exit_code,
        )

    def _execute_builtin(self, tool: SkillTool, args: ToolArgs) -> ToolResult:
        if tool.command == "echo":
            output = "Echo from skill"
            described = _describe_args(args)
            if described:
                output = f"{output}: {described}"
            return ToolResult(tool_name=tool.name, success=True, output=output, exit_code=0)

        return ToolResult(
            tool_name=tool.name,
            success=False,
            output=f"Unknown built-in tool: {tool.command}",
            exit_code=-1,
        )

    def _execute_http(self, tool: SkillTool, args: ToolArgs) -> ToolResult:
        url = tool.command
        params = None
        if isinstance(args, str):
            url = f"{url}{args}"
        elif args:
            params = {str(key): str(value) for key, value in args.items()}

        try:
            if self.http_client is not None:
                response = self.http_client.get(url, params=params, timeout=self.timeout)
            else:
                with httpx.Client(follow_redirects=True) as client:
                    response = client.get(url, params=params, timeout=self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return ToolResult(
                tool_name=tool.name,
                success=False,
                output=f"HTTP request failed: {e}",
                exit_code=-1,
            )

        return ToolResult(
            tool_name=tool.name,
            success=response.is_success,
            output=response.text,
            exit_code=response.status_code,
        )


def execute_skill_tool(
    skill: Skill, tool_name: str, args: ToolArgs = None, timeout: float | None = None
) -> ToolResult:
    """Execute a skill tool with a default executor."""
    return SkillToolExecutor(timeout=timeout).execute(skill, tool_name, args)
