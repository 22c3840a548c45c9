"""Command-line interface for autobump."""

from __future__ import annotations

from autobump.cli.main import cli

__all__ = ["cli"]
