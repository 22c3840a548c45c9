"""Implementation of the 'check' command.

Reports whether the changelog has anything to release, so scripts can
skip projects with an empty Unreleased section.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from autobump.config import load_config
from autobump.core.changelog import find_latest_version, is_changelog_unreleased_empty
from autobump.exceptions import AutobumpError, NoVersionFoundError
from autobump.project.changelog_file import read_changelog_lines

if TYPE_CHECKING:
    from rich.console import Console


def run_check(
    path: str | None,
    changelog: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the check command.

    Exits with status 0 when there are unreleased changes and 1 when the
    Unreleased section is empty.
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
        changelog_path = project_path / (changelog or config.changelog_path)
        lines = read_changelog_lines(changelog_path)
        empty = is_changelog_unreleased_empty(lines)
    except AutobumpError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(2) from e

    try:
        latest = str(find_latest_version(lines))
    except NoVersionFoundError:
        latest = "none"

    if empty:
        console.print(
            f"[yellow]Nothing to release[/] in {changelog_path.name} (latest: [cyan]{latest}[/])"
        )
        raise SystemExit(1)

    console.print(
        f"[green]Unreleased changes found[/] in {changelog_path.name} (latest: [cyan]{latest}[/])"
    )
