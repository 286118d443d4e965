"""Command-line interface for skillhost."""

from skillhost.cli.app import app

__all__ = ["app"]
