"""Duplicate detection for changelog entries.

Entries are deduplicated per category in two passes:

1. Exact duplicates (ignoring surrounding whitespace) are dropped, keeping
   the first occurrence.
2. Near duplicates are detected by comparing the word sets of normalized
   entries. Normalization removes the bullet, code spans (package and tool
   names), version numbers, case and redundant whitespace, so that
   "changed the Go version to `1.26.0` and updated all module dependencies"
   and "changed the Go module dependencies to their latest versions" are
   recognized as describing the same change.

When two entries overlap, the one mentioning the higher version is kept,
then the longer (more specific) one, then the earlier one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from autobump.core.version import Version
from autobump.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.6

STOP_WORDS = frozenset(
    {
        "a",
        "all",
        "an",
        "and",
        "are",
        "as",
        "at",
        "be",
        "by",
        "for",
        "from",
        "in",
        "into",
        "is",
        "it",
        "its",
        "of",
        "on",
        "or",
        "that",
        "the",
        "their",
        "this",
        "to",
        "was",
        "were",
        "with",
    }
)

BULLET_PREFIX = "- "
CODE_SPAN_PATTERN = re.compile(r"`[^`]*`")
VERSION_TOKEN_PATTERN = re.compile(r"\b[vV]?\d+\.\d+(?:\.\d+)?\b")
VERSION_CAPTURE_PATTERN = re.compile(r"\b[vV]?(\d+)\.(\d+)(?:\.(\d+))?\b")
WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_entry(entry: str) -> str:
    """Reduce an entry to the words that describe the change.

    Args:
        entry: Raw changelog line, e.g. "- bumped `foo` to v2.3.1"

    Returns:
        Lowercased text without bullet, code spans or version numbers
    """
    text = entry.strip()
    if text.startswith(BULLET_PREFIX):
        text = text[len(BULLET_PREFIX) :]

    text = CODE_SPAN_PATTERN.sub(" ", text)
    text = VERSION_TOKEN_PATTERN.sub(" ", text)
    return WHITESPACE_PATTERN.sub(" ", text.lower()).strip()


def tokenize(normalized: str) -> list[str]:
    """Split normalized text into significant words.

    Stop words and single-character words are dropped.
    """
    return [word for word in normalized.split() if len(word) > 1 and word not in STOP_WORDS]


def extract_max_version(entry: str) -> Version | None:
    """Return the highest version mentioned anywhere in the entry, if any."""
    versions = [
        Version(int(major), int(minor), int(patch or 0))
        for major, minor, patch in VERSION_CAPTURE_PATTERN.findall(entry)
    ]
    return max(versions, default=None)


def overlap_ratio(tokens_a: list[str] | set[str], tokens_b: list[str] | set[str]) -> float:
    """Overlap coefficient of two token collections.

    |A & B| / min(|A|, |B|), or 0.0 when either side is empty.
    """
    set_a = set(tokens_a)
    set_b = set(tokens_b)
    if not set_a or not set_b:
        return 0.0
    return len(set_a & set_b) / min(len(set_a), len(set_b))


@dataclass(frozen=True)
class _Candidate:
    index: int
    raw: str
    tokens: frozenset[str]
    version: Version | None

    @classmethod
    def from_entry(cls, index: int, entry: str) -> _Candidate:
        return cls(
            index=index,
            raw=entry,
            tokens=frozenset(tokenize(normalize_entry(entry))),
            version=extract_max_version(entry),
        )


def _pick_survivor(earlier: _Candidate, later: _Candidate) -> _Candidate:
    if earlier.version != later.version:
        if earlier.version is None:
            return later
        if later.version is None:
            return earlier
        return later if later.version > earlier.version else earlier

    if len(later.raw.strip()) > len(earlier.raw.strip()):
        return later
    return earlier


def _remove_exact_duplicates(entries: list[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for entry in entries:
        key = entry.strip()
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)
    return unique


def deduplicate_entries(
    entries: list[str],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[str]:
    """Remove exact and near-duplicate entries, preserving order.

    Args:
        entries: Raw entry lines of a single category
        threshold: Minimum overlap ratio for two entries to be duplicates

    Returns:
        New list with the surviving entries in their original order
    """
    if len(entries) <= 1:
        return list(entries)

    unique = _remove_exact_duplicates(entries)
    candidates = [_Candidate.from_entry(index, entry) for index, entry in enumerate(unique)]
    removed: set[int] = set()

    # O(n^2), sections hold tens of entries at most
    for i, first in enumerate(candidates):
        if i in removed:
            continue
        for second in candidates[i + 1 :]:
            if second.index in removed:
                continue
            ratio = overlap_ratio(first.tokens, second.tokens)
            if ratio < threshold:
                continue

            survivor = _pick_survivor(first, second)
            loser = second if survivor is first else first
            removed.add(loser.index)
            logger.debug(
                "changelog_entry_deduplicated",
                kept=survivor.raw.strip(),
                dropped=loser.raw.strip(),
                ratio=round(ratio, 3),
            )
            if loser is first:
                break

    result = [candidate.raw for candidate in candidates if candidate.index not in removed]
    if len(result) != len(entries):
        logger.info("changelog_entries_deduplicated", before=len(entries), after=len(result))
    return result
