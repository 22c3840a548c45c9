"""Implementation of the 'update' command.

The update command releases the Unreleased section of the changelog
and copies the new version into the project's version files.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.panel import Panel

from autobump.config import load_config
from autobump.config.loader import get_project_name
from autobump.exceptions import AutobumpError, NoChangesFoundError
from autobump.project.changelog_file import update_changelog_file
from autobump.project.pyproject import (
    get_pyproject_version,
    get_version_from_file,
    update_pyproject_version,
    update_version_file,
)

if TYPE_CHECKING:
    from rich.console import Console

    from autobump.config.models import AutobumpConfig
    from autobump.core.version import Version


def run_update(
    path: str | None,
    execute: bool,
    changelog: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the update command.

    Args:
        path: Optional path to project directory
        execute: Whether to actually apply changes
        changelog: Changelog path overriding the configured one
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    # Load configuration
    try:
        config = load_config(project_path)
    except AutobumpError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    changelog_path = project_path / (changelog or config.changelog_path)
    version_files = _version_files(project_path, config, err_console)

    # Compute the next version, writing the changelog only when executing
    try:
        next_version = update_changelog_file(
            changelog_path,
            threshold=config.changelog.similarity_threshold,
            initial_version=config.changelog.initial,
            dry_run=not execute,
        )
    except NoChangesFoundError:
        console.print("[yellow]No changes found in the Unreleased section. Nothing to do.[/]")
        return
    except AutobumpError as e:
        err_console.print(f"[red]Error processing changelog:[/] {e}")
        raise SystemExit(1) from e

    current_version = _current_version(project_path, config, version_files)
    mode_str = "[green]EXECUTING[/]" if execute else "[yellow]DRY-RUN[/]"
    if current_version is None:
        console.print(f"\n{mode_str} - Releasing version [green]{next_version}[/]\n")
    else:
        console.print(
            f"\n{mode_str} - Updating from [cyan]{current_version}[/] to [green]{next_version}[/]\n"
        )

    if not execute:
        targets = [f"  • Release the Unreleased section of [cyan]{changelog_path.name}[/]"]
        if config.version.update_pyproject:
            targets.append("  • Update version in [cyan]pyproject.toml[/]")
        targets.extend(f"  • Update version in [cyan]{vf}[/]" for vf in version_files)
        console.print(
            Panel(
                "[bold]Would make the following changes:[/]\n\n" + "\n".join(targets),
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        console.print("\n[dim]Run with [cyan]--execute[/] to apply these changes.[/]")
        return

    console.print(f"  [green]✓[/] Updated {changelog_path.name}")
    _apply_version(project_path, config, version_files, next_version, console, err_console)

    console.print(
        Panel(
            f"[green]Successfully updated to version {next_version}![/]\n\n"
            "Next steps:\n"
            "  1. Review the changes\n"
            f"  2. Commit: [cyan]git add . && git commit -m "
            f"'chore(release): bump version to {next_version}'[/]",
            title="[green]Update Complete[/]",
            border_style="green",
        )
    )


def _current_version(
    project_path: Path,
    config: AutobumpConfig,
    version_files: list[str],
) -> str | None:
    try:
        if config.version.update_pyproject:
            return get_pyproject_version(project_path)
        if version_files:
            return get_version_from_file(project_path / version_files[0])
    except AutobumpError:
        return None
    return None


def _version_files(
    project_path: Path,
    config: AutobumpConfig,
    err_console: Console,
) -> list[str]:
    if not config.version.version_files:
        return []
    try:
        project_name = get_project_name(project_path)
    except AutobumpError as e:
        err_console.print(f"[red]Error reading project name:[/] {e}")
        raise SystemExit(1) from e
    return config.version_file_paths(project_name)


def _apply_version(
    project_path: Path,
    config: AutobumpConfig,
    version_files: list[str],
    next_version: Version,
    console: Console,
    err_console: Console,
) -> None:
    """Write the new version into pyproject.toml and the version files."""
    if config.version.update_pyproject:
        try:
            update_pyproject_version(project_path, str(next_version))
            console.print("  [green]✓[/] Updated version in pyproject.toml")
        except AutobumpError as e:
            err_console.print(f"[red]Error updating pyproject.toml:[/] {e}")
            raise SystemExit(1) from e

    for version_file in version_files:
        try:
            update_version_file(project_path / version_file, str(next_version))
            console.print(f"  [green]✓[/] Updated version in {version_file}")
        except AutobumpError as e:
            err_console.print(f"[red]Error updating {version_file}:[/] {e}")
            raise SystemExit(1) from e
