"""Shared test fixtures."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

RELEASE_DATE = date(2025, 6, 15)

CHANGELOG_CONTENT = """\
# Changelog

All notable changes to this project will be documented in this file.

## [Unreleased]

### Added

- added a new command for listing releases

### Fixed

- fixed crash when the changelog is empty

## [1.0.0] - 2025-01-01

### Added

- initial release
"""

PYPROJECT_CONTENT = """\
[project]
name = "test-project"
version = "1.0.0"
description = "A test project"

[tool.autobump]
changelog_path = "CHANGELOG.md"

[tool.autobump.version]
version_files = ["src/{project_name}/__init__.py"]
"""


@pytest.fixture
def release_date() -> date:
    """Fixed release date for rendered headings."""
    return RELEASE_DATE


@pytest.fixture
def temp_project(tmp_path: Path) -> Path:
    """Create a project with pyproject.toml, a changelog and a version file."""
    (tmp_path / "pyproject.toml").write_text(PYPROJECT_CONTENT)
    (tmp_path / "CHANGELOG.md").write_text(CHANGELOG_CONTENT)

    package_dir = tmp_path / "src" / "test_project"
    package_dir.mkdir(parents=True)
    (package_dir / "__init__.py").write_text('"""Test project."""\n\n__version__ = "1.0.0"\n')

    return tmp_path
