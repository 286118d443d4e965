"""Utility functions for CLI module."""

import os
import platform
import sys

from rich.console import Console


def get_console() -> Console:
    """Create Rich console with proper encoding for Windows.

    On Windows in non-interactive mode (subprocess, pipe, etc.) the default
    encoding is often CP1252, which cannot handle Unicode characters. UTF-8
    is forced in that case.

    Returns:
        Console: Configured Rich console instance
    """
    if platform.system() == "Windows" and not sys.stdout.isatty():
        encoding = (sys.stdout.encoding or "").lower()
        if "utf" not in encoding:
            os.environ["PYTHONIOENCODING"] = "utf-8"
            return Console(force_terminal=True, legacy_windows=False)
    return Console()


def parse_tool_args(values: list[str]) -> str | dict[str, str] | None:
    """Turn command-line tool arguments into executor arguments.

    ``key=value`` pairs become a mapping; anything else is joined into one
    flat argument string.

    Examples:
        >>> parse_tool_args(["msg=hi", "count=2"])
        {'msg': 'hi', 'count': '2'}
        >>> parse_tool_args(["hello", "world"])
        'hello world'
    """
    if not values:
        return None

    if all("=" in value for value in values):
        pairs = (value.split("=", 1) for value in values)
        return {key: val for key, val in pairs}

    return " ".join(values)
