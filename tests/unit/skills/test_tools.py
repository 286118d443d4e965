"""Unit tests for skill tool conversion and execution."""

import subprocess
from unittest.mock import Mock

import httpx
import pytest

from skillhost.skills.errors import (
    SkillInvalidArgumentError,
    SkillNotFoundError,
    SkillNotImplementedError,
    SkillToolExecutionError,
    SkillToolRegistrationError,
)
from skillhost.skills.tools import (
    ExtensionToolType,
    SkillToolExecutor,
    build_shell_command,
    execute_skill_tool,
    register_skill_tools,
    run_shell_command,
    skill_tool_to_extension,
)
from tests.helpers.builders import build_skill, build_tool


class TestSkillToolToExtension:
    """Test conversion to host tool definitions."""

    @pytest.mark.parametrize(
        "kind, expected",
        [
            ("shell", ExtensionToolType.SHELL),
            ("http", ExtensionToolType.HTTP),
            ("builtin", ExtensionToolType.BUILTIN),
            ("script", ExtensionToolType.CUSTOM),
            ("custom", ExtensionToolType.CUSTOM),
            ("wasm", ExtensionToolType.CUSTOM),
        ],
    )
    def test_kind_mapping(self, kind, expected):
        """Should map skill tool kinds to extension tool types."""
        assert skill_tool_to_extension(build_tool(kind=kind)).type is expected

    def test_fields(self):
        """Should copy name, description and command with empty parameters."""
        definition = skill_tool_to_extension(build_tool(name="hi", command="echo hi"))

        assert definition.name == "hi"
        assert definition.description == "hi tool"
        assert definition.command == "echo hi"
        assert definition.parameters == {"type": "object", "properties": {}}

    def test_empty_command_is_none(self):
        """Should leave command unset when the tool has none."""
        assert skill_tool_to_extension(build_tool(kind="builtin", command="")).command is None

    def test_none_tool(self):
        """Should reject None."""
        with pytest.raises(SkillInvalidArgumentError):
            skill_tool_to_extension(None)


class TestRegisterSkillTools:
    """Test handing skill tools to the host."""

    def test_registers_in_order(self):
        """Should register every tool in declaration order."""
        host = Mock()
        skill = build_skill(tools=[build_tool(name="a"), build_tool(name="b")])

        definitions = register_skill_tools(skill, host)

        assert [d.name for d in definitions] == ["a", "b"]
        registered = [call.args[0].name for call in host.register_tool.call_args_list]
        assert registered == ["a", "b"]

    def test_host_failure_aborts(self):
        """Should stop at the first host failure."""
        host = Mock()
        host.register_tool.side_effect = [None, RuntimeError("full"), None]
        skill = build_skill(
            tools=[build_tool(name="a"), build_tool(name="b"), build_tool(name="c")]
        )

        with pytest.raises(SkillToolRegistrationError, match="'b'"):
            register_skill_tools(skill, host)
        assert host.register_tool.call_count == 2

    def test_unloaded_skill(self):
        """Should refuse skills that are not loaded."""
        with pytest.raises(SkillInvalidArgumentError):
            register_skill_tools(build_skill(loaded=False), Mock())

    def test_missing_host(self):
        """Should refuse a None host."""
        with pytest.raises(SkillInvalidArgumentError):
            register_skill_tools(build_skill(), None)


class TestBuildShellCommand:
    """Test shell command line construction."""

    def test_no_args(self):
        """Should return the command unchanged."""
        assert build_shell_command(build_tool(command="ls -la")) == "ls -la"

    def test_flat_string_appended_verbatim(self):
        """Should append a flat argument string as-is."""
        assert build_shell_command(build_tool(command="echo"), "a  b") == "echo a  b"

    def test_mapping_is_quoted(self):
        """Should shell-quote structured argument values."""
        command = build_shell_command(build_tool(command="echo"), {"msg": "hi there"})
        assert command == "echo 'hi there'"

    def test_mapping_merges_over_defaults(self):
        """Should override declared defaults and keep their order."""
        tool = build_tool(command="cmd", args={"a": "1", "b": "2"})
        assert build_shell_command(tool, {"b": "x", "c": "3"}) == "cmd 1 x 3"

    def test_flat_string_ignores_defaults(self):
        """Should drop declared default args when given a flat string."""
        tool = build_tool(command="cmd", args={"a": "1"})
        assert build_shell_command(tool, "text") == "cmd text"

    def test_defaults_only(self):
        """Should use declared defaults when no args are given."""
        tool = build_tool(command="cmd", args={"a": "1"})
        assert build_shell_command(tool) == "cmd 1"


class TestSkillToolExecutor:
    """Test tool dispatch by kind."""

    def test_echo_hi(self):
        """Should run a shell tool and capture its output."""
        skill = build_skill(tools=[build_tool(name="hi", command="echo hi")])

        result = SkillToolExecutor(timeout=30).execute(skill, "hi")

        assert result.success is True
        assert result.exit_code == 0
        assert result.output.strip() == "hi"
        assert result.tool_name == "hi"

    def test_shell_failure_is_soft(self):
        """Should report a non-zero exit as success=False."""
        skill = build_skill(tools=[build_tool(name="fail", command="exit 3")])

        result = SkillToolExecutor().execute(skill, "fail")

        assert result.success is False
        assert result.exit_code == 3

    def test_shell_runner_receives_command_and_timeout(self):
        """Should pass the built command line and timeout to the runner."""
        runner = Mock(return_value=("out", 0))
        skill = build_skill(tools=[build_tool(name="t", command="echo")])

        SkillToolExecutor(shell_runner=runner, timeout=5).execute(skill, "t", "hello")

        runner.assert_called_once_with("echo hello", timeout=5)

    def test_shell_timeout(self):
        """Should report a timeout as a soft failure."""
        runner = Mock(side_effect=subprocess.TimeoutExpired("sleep 10", 1))
        skill = build_skill(tools=[build_tool(name="slow", command="sleep 10")])

        result = SkillToolExecutor(shell_runner=runner, timeout=1).execute(skill, "slow")

        assert result.success is False
        assert result.exit_code == -1
        assert "timed out" in result.output

    def test_shell_cannot_start(self):
        """Should raise SkillToolExecutionError when the shell cannot start."""
        runner = Mock(side_effect=OSError("no shell"))
        skill = build_skill(tools=[build_tool(name="t")])

        with pytest.raises(SkillToolExecutionError):
            SkillToolExecutor(shell_runner=runner).execute(skill, "t")

    def test_builtin_echo(self):
        """Should echo the arguments from the built-in echo tool."""
        skill = build_skill(tools=[build_tool(name="e", kind="builtin", command="echo")])
        executor = SkillToolExecutor()

        assert executor.execute(skill, "e").output == "Echo from skill"
        assert executor.execute(skill, "e", "hi").output == "Echo from skill: hi"
        assert executor.execute(skill, "e", {"a": "x", "b": "y"}).output == "Echo from skill: x y"

    def test_builtin_unknown(self):
        """Should report unknown built-ins as a soft failure."""
        skill = build_skill(tools=[build_tool(name="u", kind="builtin", command="dance")])

        result = SkillToolExecutor().execute(skill, "u")

        assert result.success is False
        assert result.output == "Unknown built-in tool: dance"

    def test_http_get(self):
        """Should issue a GET with structured args as query params."""
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            return httpx.Response(200, text="pong")

        client = httpx.Client(transport=httpx.MockTransport(handler))
        skill = build_skill(
            tools=[build_tool(name="ping", kind="http", command="https://example.com/ping")]
        )

        result = SkillToolExecutor(http_client=client).execute(skill, "ping", {"q": "1"})

        assert result.success is True
        assert result.exit_code == 200
        assert result.output == "pong"
        assert seen["url"] == "https://example.com/ping?q=1"

    def test_http_error_status(self):
        """Should report error statuses as success=False."""
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(404)))
        skill = build_skill(tools=[build_tool(name="p", kind="http", command="https://x.test/")])

        result = SkillToolExecutor(http_client=client).execute(skill, "p")

        assert result.success is False
        assert result.exit_code == 404

    def test_http_transport_error(self):
        """Should report transport errors as a soft failure."""

        def handler(request):
            raise httpx.ConnectError("down", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        skill = build_skill(tools=[build_tool(name="p", kind="http", command="https://x.test/")])

        result = SkillToolExecutor(http_client=client).execute(skill, "p")

        assert result.success is False
        assert result.exit_code == -1

    @pytest.mark.parametrize("kind", ["script", "custom", "wasm"])
    def test_not_implemented_kinds(self, kind):
        """Should raise SkillNotImplementedError for kinds without a strategy."""
        skill = build_skill(tools=[build_tool(name="t", kind=kind)])

        with pytest.raises(SkillNotImplementedError):
            SkillToolExecutor().execute(skill, "t")

    def test_unknown_tool(self):
        """Should raise SkillNotFoundError for undeclared tools."""
        with pytest.raises(SkillNotFoundError):
            SkillToolExecutor().execute(build_skill(tools=[build_tool()]), "missing")

    def test_unloaded_skill(self):
        """Should refuse skills that are not loaded."""
        skill = build_skill(loaded=False, tools=[build_tool()])
        with pytest.raises(SkillInvalidArgumentError):
            SkillToolExecutor().execute(skill, "greet")


def test_run_shell_command_merges_stderr():
    """Should capture stderr together with stdout."""
    output, exit_code = run_shell_command("echo out; echo err 1>&2", timeout=30)
    assert "out" in output
    assert "err" in output
    assert exit_code == 0


def test_execute_skill_tool():
    """Should execute with a default executor."""
    skill = build_skill(tools=[build_tool(name="e", kind="builtin", command="echo")])
    assert execute_skill_tool(skill, "e", "x").output == "Echo from skill: x"
