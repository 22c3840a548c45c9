"""Command-line interface for autobump."""

from __future__ import annotations

import click
from rich.console import Console

from autobump import __version__
from autobump.cli.commands import run_check, run_update
from autobump.logging import LOG_FORMATS, configure_logging

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS),
    default="plain",
    show_default=True,
    help="Log output format.",
)
def cli(verbose: bool, log_format: str) -> None:
    """Bump semantic versions from a Keep a Changelog document."""
    configure_logging("DEBUG" if verbose else "WARNING", log_format)


@cli.command()
@click.argument("path", required=False, type=click.Path(exists=True, file_okay=False))
@click.option("--execute", is_flag=True, help="Apply the changes instead of previewing them.")
@click.option("--changelog", help="Changelog path relative to PATH (overrides config).")
def update(path: str | None, execute: bool, changelog: str | None) -> None:
    """Release the Unreleased section and bump the project version."""
    run_update(path, execute, changelog, console, err_console)


@cli.command()
@click.argument("path", required=False, type=click.Path(exists=True, file_okay=False))
@click.option("--changelog", help="Changelog path relative to PATH (overrides config).")
def check(path: str | None, changelog: str | None) -> None:
    """Exit 0 if there is something to release, 1 otherwise."""
    run_check(path, changelog, console, err_console)


@cli.command()
def version() -> None:
    """Show the autobump version."""
    console.print(f"autobump {__version__}")


if __name__ == "__main__":
    cli()
