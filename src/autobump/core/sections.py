"""Change categories of a Keep a Changelog release section.

A Sections instance holds one ordered bucket of raw entry lines per
category. ChangeCounts summarizes the buckets into bump severities.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from autobump.core.version import BumpType

BREAKING_CHANGE_MARKER = "- **BREAKING CHANGE:**"


class Category(str, Enum):
    """Keep a Changelog change categories.

    Declaration order is the order categories are rendered in.
    """

    ADDED = "Added"
    CHANGED = "Changed"
    DEPRECATED = "Deprecated"
    FIXED = "Fixed"
    REMOVED = "Removed"
    SECURITY = "Security"

    def __str__(self) -> str:
        return self.value

    @property
    def heading(self) -> str:
        """Canonical third-level heading, e.g. ``### Added``."""
        return f"### {self.value}"


CATEGORY_NAMES: tuple[str, ...] = tuple(category.value for category in Category)


def is_breaking_change(entry: str) -> bool:
    """Check whether a raw entry line carries the breaking change marker."""
    return entry.startswith(BREAKING_CHANGE_MARKER)


@dataclass
class Sections:
    """Fixed record of per-category entry buckets."""

    buckets: dict[Category, list[str]] = field(
        default_factory=lambda: {category: [] for category in Category}
    )

    def __getitem__(self, category: Category) -> list[str]:
        return self.buckets[category]

    def __setitem__(self, category: Category, entries: list[str]) -> None:
        self.buckets[category] = list(entries)

    def __iter__(self) -> Iterator[tuple[Category, list[str]]]:
        for category in Category:
            yield category, self.buckets[category]

    def is_empty(self) -> bool:
        return not any(self.buckets.values())

    def total(self) -> int:
        return sum(len(entries) for entries in self.buckets.values())


@dataclass
class ChangeCounts:
    """Number of entries per bump severity."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def record(self, category: Category, entry: str) -> None:
        """Count one accepted entry of the given category."""
        if is_breaking_change(entry):
            self.major += 1
        elif category == Category.ADDED:
            self.minor += 1
        else:
            self.patch += 1

    def is_empty(self) -> bool:
        return self.major == 0 and self.minor == 0 and self.patch == 0


def recount_changes(sections: Sections) -> ChangeCounts:
    """Recompute severity counts from (deduplicated) sections."""
    counts = ChangeCounts()
    for category, entries in sections:
        for entry in entries:
            counts.record(category, entry)
    return counts


def calculate_bump(counts: ChangeCounts) -> BumpType:
    """Determine the bump type from severity counts.

    Major takes precedence over minor, minor over patch.
    """
    if counts.major > 0:
        return BumpType.MAJOR
    if counts.minor > 0:
        return BumpType.MINOR
    if counts.patch > 0:
        return BumpType.PATCH
    return BumpType.NONE
