"""Reading and writing the changelog file.

The engine in autobump.core works on lists of lines; this module is the
only place where a changelog touches the filesystem.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from autobump.core.changelog import INITIAL_RELEASE_VERSION, process_changelog
from autobump.core.dedup import DEFAULT_SIMILARITY_THRESHOLD
from autobump.exceptions import ChangelogNotFoundError
from autobump.logging import get_logger

if TYPE_CHECKING:
    from datetime import date
    from pathlib import Path

    from autobump.core.version import Version

logger = get_logger(__name__)


def read_changelog_lines(path: Path) -> list[str]:
    """Read the changelog as a list of lines without line terminators.

    Raises:
        ChangelogNotFoundError: If the file does not exist
    """
    if not path.is_file():
        raise ChangelogNotFoundError(f"Changelog not found: {path}")
    return path.read_text(encoding="utf-8").splitlines()


def write_changelog_lines(path: Path, lines: list[str]) -> None:
    """Write lines to the changelog, each terminated by a newline."""
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")


def update_changelog_file(
    path: Path,
    *,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    initial_version: Version = INITIAL_RELEASE_VERSION,
    release_date: date | None = None,
    dry_run: bool = False,
) -> Version:
    """Release the Unreleased section of a changelog file.

    Args:
        path: Path to the changelog
        threshold: Similarity threshold for near-duplicate entries
        initial_version: Version used when nothing was released yet
        release_date: Date of the release, today when omitted
        dry_run: Compute the version without writing the file

    Returns:
        The next version

    Raises:
        ChangelogNotFoundError: If the file does not exist
        NoChangesFoundError: If there is nothing to release
    """
    lines = read_changelog_lines(path)
    logger.debug("changelog_read", path=str(path), line_count=len(lines))

    version, new_lines = process_changelog(
        lines,
        threshold=threshold,
        initial_version=initial_version,
        release_date=release_date,
    )

    if dry_run:
        logger.info("changelog_dry_run", path=str(path), version=str(version))
        return version

    write_changelog_lines(path, new_lines)
    logger.info("changelog_updated", path=str(path), version=str(version))
    return version
