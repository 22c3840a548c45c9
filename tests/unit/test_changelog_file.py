"""Tests for reading, writing and releasing the changelog file."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from autobump.core.version import Version
from autobump.exceptions import ChangelogNotFoundError, NoChangesFoundError
from autobump.project.changelog_file import (
    read_changelog_lines,
    update_changelog_file,
    write_changelog_lines,
)


class TestReadWrite:
    """Tests for read_changelog_lines() and write_changelog_lines()."""

    def test_read_strips_terminators(self, tmp_path: Path):
        """Lines come back without newlines."""
        changelog = tmp_path / "CHANGELOG.md"
        changelog.write_text("# Changelog\r\n\n## [Unreleased]\n")

        assert read_changelog_lines(changelog) == ["# Changelog", "", "## [Unreleased]"]

    def test_read_missing_raises(self, tmp_path: Path):
        """Raises ChangelogNotFoundError for a missing file."""
        with pytest.raises(ChangelogNotFoundError):
            read_changelog_lines(tmp_path / "CHANGELOG.md")

    def test_write_terminates_every_line(self, tmp_path: Path):
        """Each line ends with a newline."""
        changelog = tmp_path / "CHANGELOG.md"

        write_changelog_lines(changelog, ["# Changelog", "", "## [Unreleased]"])

        assert changelog.read_text() == "# Changelog\n\n## [Unreleased]\n"


class TestUpdateChangelogFile:
    """Tests for update_changelog_file()."""

    def test_writes_release(self, temp_project: Path, release_date: date):
        """The Unreleased section becomes a dated release."""
        changelog = temp_project / "CHANGELOG.md"

        version = update_changelog_file(changelog, release_date=release_date)

        assert version == Version(1, 1, 0)
        content = changelog.read_text()
        assert "## [Unreleased]\n\n## [1.1.0] - 2025-06-15\n" in content
        assert "## [1.0.0] - 2025-01-01" in content
        assert content.endswith("- initial release\n")

    def test_dry_run_leaves_file(self, temp_project: Path):
        """Dry run computes the version only."""
        changelog = temp_project / "CHANGELOG.md"
        before = changelog.read_text()

        version = update_changelog_file(changelog, dry_run=True)

        assert version == Version(1, 1, 0)
        assert changelog.read_text() == before

    def test_nothing_to_release(self, tmp_path: Path):
        """An empty Unreleased section raises and leaves the file alone."""
        changelog = tmp_path / "CHANGELOG.md"
        changelog.write_text("# Changelog\n\n## [Unreleased]\n\n## [1.0.0] - 2025-01-01\n\n- initial\n")
        before = changelog.read_text()

        with pytest.raises(NoChangesFoundError):
            update_changelog_file(changelog)

        assert changelog.read_text() == before

    def test_initial_version(self, tmp_path: Path):
        """A changelog without releases uses the initial version."""
        changelog = tmp_path / "CHANGELOG.md"
        changelog.write_text("# Changelog\n\n## [Unreleased]\n\n### Added\n\n- first feature\n")

        version = update_changelog_file(changelog, initial_version=Version(0, 1, 0))

        assert version == Version(0, 1, 0)
        assert "## [0.1.0] - " in changelog.read_text()

    def test_missing_file(self, tmp_path: Path):
        """Raises ChangelogNotFoundError for a missing file."""
        with pytest.raises(ChangelogNotFoundError):
            update_changelog_file(tmp_path / "CHANGELOG.md")
