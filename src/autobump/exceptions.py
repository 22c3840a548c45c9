"""Exception hierarchy for autobump.

All errors raised by autobump derive from AutobumpError so callers can
catch them at a single boundary (the CLI does exactly that).

Two changelog errors are expected control signals rather than failures:
- NoVersionFoundError: the changelog has never been released
- NoChangesFoundError: the unreleased section has nothing to release
"""

from __future__ import annotations


class AutobumpError(Exception):
    """Base exception for all autobump errors."""

    def __init__(self, message: str, *, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\n{self.details}"
        return self.message


# Changelog


class ChangelogError(AutobumpError):
    """Raised when a changelog cannot be processed."""


class NoVersionFoundError(ChangelogError):
    """Raised when the changelog contains no released version."""

    def __init__(self, message: str = "no version found in the changelog") -> None:
        super().__init__(message)


class NoChangesFoundError(ChangelogError):
    """Raised when the unreleased section contains no changes."""

    def __init__(self, message: str = "no changes found in the unreleased section") -> None:
        super().__init__(message)


class ChangelogNotFoundError(ChangelogError):
    """Raised when the changelog file does not exist."""


# Version


class VersionError(AutobumpError):
    """Raised for version handling errors."""


class InvalidVersionError(VersionError):
    """Raised when a version string cannot be parsed."""


# Configuration


class ConfigError(AutobumpError):
    """Raised for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when pyproject.toml cannot be found."""


class ConfigValidationError(ConfigError):
    """Raised when configuration values are invalid."""


# Project


class ProjectError(AutobumpError):
    """Raised when project files cannot be read or updated."""


class VersionNotFoundError(ProjectError):
    """Raised when no version marker is found in a project file."""
