"""Version markers in project files.

This module copies a computed version into pyproject.toml and into
Python files holding ``__version__ = "..."``.

It preserves formatting and comments by using regex-based
replacement rather than full TOML parsing and rewriting.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from autobump.config.loader import find_pyproject_toml
from autobump.exceptions import ProjectError, VersionNotFoundError
from autobump.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

logger = get_logger(__name__)

# PEP 621 first, then Poetry
PYPROJECT_TABLES = (r"\[project\]", r"\[tool\.poetry\]")

TOML_VERSION_PATTERN = re.compile(r'^(version\s*=\s*)["\']([^"\']+)["\']', re.MULTILINE)
DUNDER_VERSION_PATTERN = r'^(__version__\s*=\s*)["\']([^"\']+)["\']'


def _resolve_pyproject(path: Path | None) -> Path:
    if path is None:
        return find_pyproject_toml()
    if path.is_dir():
        return find_pyproject_toml(path)
    return path


def _table_pattern(table: str) -> re.Pattern[str]:
    # The table body runs up to the next table header or EOF
    return re.compile(rf"^{table}.*?(?=^\[|\Z)", re.MULTILINE | re.DOTALL)


def get_pyproject_version(path: Path | None = None) -> str:
    """Get the version from pyproject.toml.

    Args:
        path: Path to pyproject.toml or directory to search from

    Raises:
        VersionNotFoundError: If version cannot be found
    """
    pyproject_path = _resolve_pyproject(path)
    content = pyproject_path.read_text(encoding="utf-8")

    for table in PYPROJECT_TABLES:
        table_match = _table_pattern(table).search(content)
        if table_match is None:
            continue
        version_match = TOML_VERSION_PATTERN.search(table_match.group(0))
        if version_match:
            return version_match.group(2)

    raise VersionNotFoundError(
        f"Could not find version in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )


def update_pyproject_version(path: Path | None, new_version: str) -> Path:
    """Update the version in pyproject.toml.

    Args:
        path: Path to pyproject.toml or directory containing it
        new_version: New version string to set

    Returns:
        Path to the pyproject.toml

    Raises:
        VersionNotFoundError: If version cannot be found
    """
    pyproject_path = _resolve_pyproject(path)
    content = pyproject_path.read_text(encoding="utf-8")

    def replace_version(match: re.Match[str]) -> str:
        return TOML_VERSION_PATTERN.sub(rf'\g<1>"{new_version}"', match.group(0), count=1)

    for table in PYPROJECT_TABLES:
        pattern = _table_pattern(table)
        table_match = pattern.search(content)
        if table_match is None or not TOML_VERSION_PATTERN.search(table_match.group(0)):
            continue

        new_content = pattern.sub(replace_version, content, count=1)
        if new_content == content:
            logger.info("pyproject_version_unchanged", path=str(pyproject_path), version=new_version)
        else:
            pyproject_path.write_text(new_content, encoding="utf-8")
            logger.info("pyproject_version_updated", path=str(pyproject_path), version=new_version)
        return pyproject_path

    raise VersionNotFoundError(
        f"Could not find version to update in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )


def get_version_from_file(file_path: Path, pattern: str | None = None) -> str:
    """Read the version from a Python file (e.g., __version__.py or __init__.py).

    Args:
        file_path: Path to the file to read
        pattern: Custom regex whose last group captures the version.
                 Defaults to matching __version__ = "..."

    Raises:
        VersionNotFoundError: If version pattern not found
        ProjectError: If file doesn't exist
    """
    if not file_path.is_file():
        raise ProjectError(f"Version file not found: {file_path}")

    content = file_path.read_text(encoding="utf-8")
    match = re.search(pattern or DUNDER_VERSION_PATTERN, content, re.MULTILINE)
    if match is None or match.lastindex is None:
        raise VersionNotFoundError(f"Could not find version pattern in {file_path}")
    return match.group(match.lastindex)


def update_version_file(
    file_path: Path,
    new_version: str,
    pattern: str | None = None,
) -> None:
    """Update version in a Python file (e.g., __version__.py or __init__.py).

    Args:
        file_path: Path to the file to update
        new_version: New version string
        pattern: Custom regex with the text before the version in group 1.
                 Defaults to matching __version__ = "..."

    Raises:
        VersionNotFoundError: If version pattern not found
        ProjectError: If file doesn't exist
    """
    if not file_path.is_file():
        raise ProjectError(f"Version file not found: {file_path}")

    content = file_path.read_text(encoding="utf-8")

    new_content, count = re.subn(
        pattern or DUNDER_VERSION_PATTERN,
        rf'\g<1>"{new_version}"',
        content,
        count=1,
        flags=re.MULTILINE,
    )

    if count == 0:
        raise VersionNotFoundError(f"Could not find version pattern in {file_path}")

    file_path.write_text(new_content, encoding="utf-8")
    logger.info("version_file_updated", path=str(file_path), version=new_version)
