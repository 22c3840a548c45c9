"""Project file handling: the changelog file and version markers."""

from __future__ import annotations

from autobump.project.changelog_file import (
    read_changelog_lines,
    update_changelog_file,
    write_changelog_lines,
)
from autobump.project.pyproject import (
    get_pyproject_version,
    get_version_from_file,
    update_pyproject_version,
    update_version_file,
)

__all__ = [
    "get_pyproject_version",
    "get_version_from_file",
    "read_changelog_lines",
    "update_changelog_file",
    "update_pyproject_version",
    "update_version_file",
    "write_changelog_lines",
]
