"""Command-line interface for streamtune."""

from streamtune.cli.main import app, main

__all__ = ["app", "main"]
