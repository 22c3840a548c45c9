"""Semantic version parsing and bumping.

Changelog headings carry ``major.minor.patch`` versions. Parsing is
lenient in the same places release tooling usually is: an optional ``v``
prefix is accepted and missing minor/patch components default to zero.
Pre-release (``-rc.1``) and build (``+build.5``) suffixes follow SemVer 2.0:
a pre-release sorts below its release and build metadata is ignored when
comparing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering

from autobump.exceptions import InvalidVersionError

_IDENTIFIERS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

VERSION_PATTERN = re.compile(
    r"^\s*[vV]?(?P<major>0|[1-9]\d*)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?"
    rf"(?:-(?P<prerelease>{_IDENTIFIERS}))?(?:\+(?P<build>{_IDENTIFIERS}))?\s*$"
)


class BumpType(str, Enum):
    """Type of version bump to apply."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


def _prerelease_key(prerelease: str) -> tuple:
    # A release sorts after every pre-release of the same version
    if not prerelease:
        return (1,)

    identifiers = []
    for part in prerelease.split("."):
        if part.isdigit():
            identifiers.append((0, int(part), ""))
        else:
            identifiers.append((1, 0, part))
    return (0, tuple(identifiers))


@total_ordering
@dataclass(frozen=True)
class Version:
    """An immutable semantic version.

    Ordering compares (major, minor, patch) numerically, then the
    pre-release identifiers. Build metadata takes no part in equality.
    """

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: str = ""
    build: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if self.major < 0 or self.minor < 0 or self.patch < 0:
            raise InvalidVersionError(f"Version components must be non-negative: {self!r}")

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.build:
            version += f"+{self.build}"
        return version

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def _sort_key(self) -> tuple:
        return (self.major, self.minor, self.patch, _prerelease_key(self.prerelease))

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    @classmethod
    def parse(cls, raw: str) -> Version:
        """Parse a version string such as ``1.2.3``, ``v1.2`` or ``1.0.0-rc.1``.

        Raises:
            InvalidVersionError: If the string is not a valid version
        """
        match = VERSION_PATTERN.match(raw)
        if match is None:
            raise InvalidVersionError(f"Invalid version: {raw!r}")

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            patch=int(match.group("patch") or 0),
            prerelease=match.group("prerelease") or "",
            build=match.group("build") or "",
        )

    def bump(self, bump_type: BumpType) -> Version:
        """Return the next version for the given bump type.

        The result never carries pre-release or build suffixes. A patch bump
        of a pre-release releases it as is: ``1.0.1-rc.1`` becomes ``1.0.1``.
        """
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if bump_type == BumpType.PATCH:
            if self.is_prerelease:
                return Version(self.major, self.minor, self.patch)
            return Version(self.major, self.minor, self.patch + 1)
        return self


def parse_version(raw: str) -> Version:
    """Parse a version string. See Version.parse()."""
    return Version.parse(raw)
