"""Changelog version-bump engine.

This module reads a "Keep a Changelog" document as a list of lines,
computes the next semantic version from its Unreleased section and
renders the document with that section turned into a dated release.

Severity rules:
- an entry starting with ``- **BREAKING CHANGE:**`` is a major change
- any other entry under ``### Added`` is a minor change
- every other entry is a patch change

All functions are pure: they never touch the filesystem and never modify
the lines they are given (fix_section_headings is the one exception and
only works on a block the caller owns).
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from enum import Enum, auto

from autobump.core.dedup import DEFAULT_SIMILARITY_THRESHOLD, deduplicate_entries
from autobump.core.sections import (
    CATEGORY_NAMES,
    Category,
    ChangeCounts,
    Sections,
    calculate_bump,
    recount_changes,
)
from autobump.core.version import Version
from autobump.exceptions import NoChangesFoundError, NoVersionFoundError
from autobump.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CHANGELOG_URL = (
    "https://raw.githubusercontent.com/rios0rios0/autobump/main/configs/CHANGELOG.template.md"
)

INITIAL_RELEASE_VERSION = Version(1, 0, 0)

UNRELEASED_MARKER = "[Unreleased]"
UNRELEASED_HEADING = "## [Unreleased]"

VERSION_HEADING_PATTERN = re.compile(r"^\s*##\s*\[([^\]]+)\]")
SECTION_HEADING_PATTERN = re.compile(
    rf"^\s*#+\s*({'|'.join(CATEGORY_NAMES)})",
    re.IGNORECASE,
)
ENTRY_PATTERN = re.compile(r"^\s*-\s*[^ ]+")


class _ScanState(Enum):
    PREAMBLE = auto()
    IN_UNRELEASED = auto()
    IN_RELEASED = auto()


def _release_heading(version: Version) -> str:
    return f"## [{version}]"


def _format_release_date(release_date: date | None) -> str:
    if release_date is None:
        release_date = datetime.now(UTC).date()
    return release_date.strftime("%Y-%m-%d")


def _heading_version(line: str) -> Version | None:
    match = VERSION_HEADING_PATTERN.match(line)
    if match is None or match.group(1) == "Unreleased":
        return None
    return Version.parse(match.group(1))


def find_latest_version(lines: list[str]) -> Version:
    """Find the highest released version in the changelog.

    The highest version wins regardless of where its heading appears in
    the document.

    Args:
        lines: Changelog lines

    Returns:
        Highest version found in a ``## [X.Y.Z]`` heading

    Raises:
        NoVersionFoundError: If the changelog has no released version
        InvalidVersionError: If a heading holds a malformed version
    """
    latest: Version | None = None
    for line in lines:
        version = _heading_version(line)
        if version is None:
            continue
        if latest is None or version > latest:
            latest = version

    if latest is None:
        raise NoVersionFoundError()
    return latest


def fix_section_headings(block: list[str]) -> None:
    """Rewrite misleveled category headings to ``### <Category>`` in place.

    ``## Fixed`` and ``#### Added`` become ``### Fixed`` and ``### Added``.
    The case of the category word is left untouched.
    """
    for index, line in enumerate(block):
        if SECTION_HEADING_PATTERN.match(line):
            block[index] = "### " + line.replace("#", "").strip()


def parse_unreleased_into_sections(
    block: list[str],
    sections: Sections | None = None,
) -> tuple[Sections, ChangeCounts]:
    """Sort the entries of an unreleased block into category buckets.

    Lines before the first category heading, blank lines, bare ``-``
    bullets and other headings are skipped.

    Args:
        block: Lines of the unreleased block, headings already fixed
        sections: Buckets to fill, a new empty set when omitted

    Returns:
        The filled sections and the severity counts of accepted entries
    """
    if sections is None:
        sections = Sections()
    counts = ChangeCounts()
    current: Category | None = None

    for line in block:
        stripped = line.strip()

        for category in Category:
            if stripped.startswith(category.heading):
                current = category

        if current is None or stripped in ("", "-") or stripped.startswith("##"):
            continue

        sections[current].append(line)
        counts.record(current, line)

    return sections, counts


def make_new_sections(
    sections: Sections,
    version: Version,
    release_date: date | None = None,
) -> list[str]:
    """Render a fresh Unreleased header followed by the new release.

    Only non-empty categories are rendered, in Keep a Changelog order,
    each with its entries sorted.
    """
    new_section = [
        UNRELEASED_HEADING,
        "",
        f"{_release_heading(version)} - {_format_release_date(release_date)}",
        "",
    ]

    for category, entries in sections:
        if not entries:
            continue
        new_section.append(category.heading)
        new_section.append("")
        new_section.extend(sorted(entries))
        new_section.append("")

    return new_section


def make_new_sections_from_unreleased(
    block: list[str],
    version: Version,
    release_date: date | None = None,
) -> list[str]:
    """Render the new release by copying the unreleased block verbatim."""
    new_section = [
        UNRELEASED_HEADING,
        "",
        f"{_release_heading(version)} - {_format_release_date(release_date)}",
        "",
    ]
    new_section.extend(line for line in block if UNRELEASED_MARKER not in line)
    return new_section


def _classify_and_deduplicate(block: list[str], threshold: float) -> Sections:
    fix_section_headings(block)
    sections, counts = parse_unreleased_into_sections(block)
    logger.debug(
        "unreleased_section_parsed",
        major=counts.major,
        minor=counts.minor,
        patch=counts.patch,
    )

    for category, entries in sections:
        sections[category] = deduplicate_entries(entries, threshold)
    logger.debug("unreleased_entries_kept", count=sections.total())
    return sections


def update_section(
    block: list[str],
    current_version: Version,
    *,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    release_date: date | None = None,
) -> tuple[list[str], Version]:
    """Turn an unreleased block into a new release section.

    Args:
        block: Lines of the unreleased block (not modified)
        current_version: Latest released version
        threshold: Similarity threshold for near-duplicate entries
        release_date: Date of the release, today when omitted

    Returns:
        Rendered lines and the next version

    Raises:
        NoChangesFoundError: If no entries remain after deduplication
    """
    sections = _classify_and_deduplicate(list(block), threshold)

    # Deduplication may drop the only entry behind a bump level
    counts = recount_changes(sections)
    if counts.is_empty():
        raise NoChangesFoundError()

    bump_type = calculate_bump(counts)
    next_version = current_version.bump(bump_type)
    logger.info(
        "next_version_calculated",
        previous=str(current_version),
        next=str(next_version),
        bump=str(bump_type),
    )

    return make_new_sections(sections, next_version, release_date), next_version


def process_changelog(
    lines: list[str],
    *,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    initial_version: Version = INITIAL_RELEASE_VERSION,
    release_date: date | None = None,
) -> tuple[Version, list[str]]:
    """Compute the next version and the rewritten changelog.

    The Unreleased block runs from the ``[Unreleased]`` line up to the
    heading of the latest released version (or the end of the document).
    Everything outside it is copied unchanged.

    Args:
        lines: Changelog lines
        threshold: Similarity threshold for near-duplicate entries
        initial_version: Version used when nothing was released yet
        release_date: Date of the release, today when omitted

    Returns:
        Next version and new changelog lines

    Raises:
        NoChangesFoundError: If there is nothing to release
        InvalidVersionError: If a heading holds a malformed version
    """
    try:
        latest_version = find_latest_version(lines)
    except NoVersionFoundError:
        logger.info("no_previous_version", initial_version=str(initial_version))
        return process_new_changelog(
            lines,
            threshold=threshold,
            initial_version=initial_version,
            release_date=release_date,
        )

    logger.info("previous_version_found", version=str(latest_version))

    state = _ScanState.PREAMBLE
    new_content: list[str] = []
    block: list[str] = []
    next_version: Version | None = None

    for line in lines:
        if state is _ScanState.IN_RELEASED:
            new_content.append(line)
            continue

        if UNRELEASED_MARKER in line:
            state = _ScanState.IN_UNRELEASED
        elif _heading_version(line) == latest_version:
            # Matched by value, so "## [v1.0]" closes a block released as 1.0.0
            if state is _ScanState.IN_UNRELEASED:
                section, next_version = update_section(
                    block,
                    latest_version,
                    threshold=threshold,
                    release_date=release_date,
                )
                new_content.extend(section)
                block = []
            state = _ScanState.IN_RELEASED

        if state is _ScanState.IN_UNRELEASED:
            block.append(line)
        else:
            new_content.append(line)

    if block:
        # Unreleased block closed by the end of the document
        section, next_version = update_section(
            block,
            latest_version,
            threshold=threshold,
            release_date=release_date,
        )
        new_content.extend(section)

    if next_version is None:
        raise NoChangesFoundError("no unreleased section found in the changelog")

    return next_version, new_content


def process_new_changelog(
    lines: list[str],
    *,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    initial_version: Version = INITIAL_RELEASE_VERSION,
    release_date: date | None = None,
) -> tuple[Version, list[str]]:
    """Release a changelog that has no previous version.

    The version is always the initial version; entries are only used to
    render the release. When no entry can be attributed to a category the
    unreleased content is copied verbatim so the release is never empty.

    Raises:
        NoChangesFoundError: If the changelog has no Unreleased section or
            the section holds no bullet entry
    """
    new_content: list[str] = []
    block: list[str] = []

    for line in lines:
        if block or UNRELEASED_MARKER in line:
            block.append(line)
        else:
            new_content.append(line)

    if not block:
        raise NoChangesFoundError("no unreleased section found in the changelog")
    if not any(ENTRY_PATTERN.match(line) for line in block):
        raise NoChangesFoundError()

    sections = _classify_and_deduplicate(list(block), threshold)
    if sections.is_empty():
        logger.warning("unreleased_section_unclassified", line_count=len(block))
        fix_section_headings(block)
        new_content.extend(make_new_sections_from_unreleased(block, initial_version, release_date))
    else:
        new_content.extend(make_new_sections(sections, initial_version, release_date))

    logger.info("next_version_calculated", next=str(initial_version), bump="initial")
    return initial_version, new_content


def is_changelog_unreleased_empty(lines: list[str]) -> bool:
    """Check whether the Unreleased section has no bullet entries.

    A changelog without released versions is scanned to the end.

    Raises:
        InvalidVersionError: If a heading holds a malformed version
    """
    try:
        latest_version: Version | None = find_latest_version(lines)
    except NoVersionFoundError:
        latest_version = None

    state = _ScanState.PREAMBLE
    for line in lines:
        if UNRELEASED_MARKER in line:
            state = _ScanState.IN_UNRELEASED
        elif latest_version is not None and _heading_version(line) == latest_version:
            # Everything from the latest release on is history
            break

        if state is _ScanState.IN_UNRELEASED and ENTRY_PATTERN.match(line):
            return False

    return True
