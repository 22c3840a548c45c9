"""Tests for version markers in pyproject.toml and version files."""

from __future__ import annotations

from pathlib import Path

import pytest

from autobump.exceptions import ProjectError, VersionNotFoundError
from autobump.project.pyproject import (
    get_pyproject_version,
    get_version_from_file,
    update_pyproject_version,
    update_version_file,
)

POETRY_CONTENT = """\
[tool.poetry]
name = "poetry-project"
version = "0.3.0"

[tool.poetry.dependencies]
python = "^3.11"
"""


class TestGetPyprojectVersion:
    """Tests for get_pyproject_version()."""

    def test_pep621(self, temp_project: Path):
        """Read [project].version."""
        assert get_pyproject_version(temp_project / "pyproject.toml") == "1.0.0"

    def test_directory(self, temp_project: Path):
        """A directory is searched for pyproject.toml."""
        assert get_pyproject_version(temp_project) == "1.0.0"

    def test_poetry(self, tmp_path: Path):
        """Fall back to [tool.poetry].version."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(POETRY_CONTENT)

        assert get_pyproject_version(pyproject) == "0.3.0"

    def test_ignores_other_tables(self, tmp_path: Path):
        """A version key outside the project tables is not used."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "x"\n\n[tool.other]\nversion = "9.9.9"\n')

        with pytest.raises(VersionNotFoundError):
            get_pyproject_version(pyproject)


class TestUpdatePyprojectVersion:
    """Tests for update_pyproject_version()."""

    def test_pep621(self, temp_project: Path):
        """Rewrite [project].version and keep everything else."""
        pyproject = temp_project / "pyproject.toml"
        before = pyproject.read_text()

        result = update_pyproject_version(pyproject, "1.1.0")

        assert result == pyproject
        assert get_pyproject_version(pyproject) == "1.1.0"
        assert pyproject.read_text() == before.replace('version = "1.0.0"', 'version = "1.1.0"')

    def test_poetry(self, tmp_path: Path):
        """Rewrite [tool.poetry].version."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(POETRY_CONTENT)

        update_pyproject_version(pyproject, "0.4.0")

        assert get_pyproject_version(pyproject) == "0.4.0"
        assert 'python = "^3.11"' in pyproject.read_text()

    def test_same_version_is_noop(self, temp_project: Path):
        """Writing the current version leaves the file alone."""
        pyproject = temp_project / "pyproject.toml"
        before = pyproject.read_text()

        update_pyproject_version(pyproject, "1.0.0")

        assert pyproject.read_text() == before

    def test_missing_version_raises(self, tmp_path: Path):
        """Raises VersionNotFoundError without a version key."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "x"\n')

        with pytest.raises(VersionNotFoundError):
            update_pyproject_version(pyproject, "1.0.0")


class TestGetVersionFromFile:
    """Tests for get_version_from_file()."""

    def test_dunder_version(self, temp_project: Path):
        """Read __version__."""
        version_file = temp_project / "src" / "test_project" / "__init__.py"

        assert get_version_from_file(version_file) == "1.0.0"

    def test_custom_pattern(self, tmp_path: Path):
        """The last group of a custom pattern is the version."""
        version_file = tmp_path / "version.py"
        version_file.write_text('VERSION = "3.2.1"\n')

        assert get_version_from_file(version_file, r'^VERSION\s*=\s*"([^"]+)"') == "3.2.1"

    def test_missing_file_raises(self, tmp_path: Path):
        """Raises ProjectError when the file is missing."""
        with pytest.raises(ProjectError):
            get_version_from_file(tmp_path / "missing.py")

    def test_missing_pattern_raises(self, tmp_path: Path):
        """Raises VersionNotFoundError when no version is present."""
        version_file = tmp_path / "module.py"
        version_file.write_text("x = 1\n")

        with pytest.raises(VersionNotFoundError):
            get_version_from_file(version_file)


class TestUpdateVersionFile:
    """Tests for update_version_file()."""

    def test_dunder_version(self, temp_project: Path):
        """Rewrite __version__."""
        version_file = temp_project / "src" / "test_project" / "__init__.py"

        update_version_file(version_file, "2.0.0")

        assert version_file.read_text() == '"""Test project."""\n\n__version__ = "2.0.0"\n'

    def test_single_quotes(self, tmp_path: Path):
        """Single-quoted versions are found too."""
        version_file = tmp_path / "_version.py"
        version_file.write_text("__version__ = '0.1.0'\n")

        update_version_file(version_file, "0.2.0")

        assert version_file.read_text() == '__version__ = "0.2.0"\n'

    def test_custom_pattern(self, tmp_path: Path):
        """A custom pattern keeps its group 1 prefix."""
        version_file = tmp_path / "version.py"
        version_file.write_text('VERSION = "1.0.0"\n')

        update_version_file(version_file, "1.0.1", pattern=r'^(VERSION\s*=\s*)"[^"]+"')

        assert version_file.read_text() == 'VERSION = "1.0.1"\n'

    def test_missing_file_raises(self, tmp_path: Path):
        """Raises ProjectError when the file is missing."""
        with pytest.raises(ProjectError):
            update_version_file(tmp_path / "missing.py", "1.0.0")

    def test_missing_pattern_raises(self, tmp_path: Path):
        """Raises VersionNotFoundError when no version is present."""
        version_file = tmp_path / "module.py"
        version_file.write_text("x = 1\n")

        with pytest.raises(VersionNotFoundError):
            update_version_file(version_file, "1.0.0")
