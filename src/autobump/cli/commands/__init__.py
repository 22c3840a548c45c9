"""CLI command implementations."""

from __future__ import annotations

from autobump.cli.commands.check import run_check
from autobump.cli.commands.update import run_update

__all__ = ["run_check", "run_update"]
