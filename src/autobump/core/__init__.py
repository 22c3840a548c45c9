"""Core business logic for autobump.

This module contains the changelog version-bump engine:
- Semantic version parsing and bumping
- Change categories and severity counting
- Near-duplicate entry detection
- Changelog parsing and rendering
"""

from __future__ import annotations

from autobump.core.changelog import (
    DEFAULT_CHANGELOG_URL,
    INITIAL_RELEASE_VERSION,
    find_latest_version,
    fix_section_headings,
    is_changelog_unreleased_empty,
    make_new_sections,
    make_new_sections_from_unreleased,
    parse_unreleased_into_sections,
    process_changelog,
    process_new_changelog,
    update_section,
)
from autobump.core.dedup import DEFAULT_SIMILARITY_THRESHOLD, deduplicate_entries
from autobump.core.sections import (
    Category,
    ChangeCounts,
    Sections,
    calculate_bump,
    recount_changes,
)
from autobump.core.version import BumpType, Version, parse_version

__all__ = [
    # Changelog
    "DEFAULT_CHANGELOG_URL",
    "DEFAULT_SIMILARITY_THRESHOLD",
    "INITIAL_RELEASE_VERSION",
    # Version
    "BumpType",
    # Sections
    "Category",
    "ChangeCounts",
    "Sections",
    "Version",
    "calculate_bump",
    "deduplicate_entries",
    "find_latest_version",
    "fix_section_headings",
    "is_changelog_unreleased_empty",
    "make_new_sections",
    "make_new_sections_from_unreleased",
    "parse_unreleased_into_sections",
    "parse_version",
    "process_changelog",
    "process_new_changelog",
    "recount_changes",
    "update_section",
]
