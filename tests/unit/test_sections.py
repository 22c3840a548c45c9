"""Tests for change categories and bump calculation."""

from __future__ import annotations

from autobump.core.sections import (
    Category,
    ChangeCounts,
    Sections,
    calculate_bump,
    is_breaking_change,
    recount_changes,
)
from autobump.core.version import BumpType


class TestCategory:
    """Tests for the Category enum."""

    def test_render_order(self):
        """Categories iterate in rendering order."""
        assert [c.value for c in Category] == [
            "Added",
            "Changed",
            "Deprecated",
            "Fixed",
            "Removed",
            "Security",
        ]

    def test_heading(self):
        """Heading is a level-3 markdown heading."""
        assert Category.SECURITY.heading == "### Security"


class TestSections:
    """Tests for the Sections buckets."""

    def test_starts_empty(self):
        """Every category starts with an empty bucket."""
        sections = Sections()
        assert sections.is_empty()
        assert all(entries == [] for _, entries in sections)

    def test_buckets_are_independent(self):
        """Appending to one bucket leaves the others untouched."""
        sections = Sections()
        sections[Category.ADDED].append("- added A")

        assert sections[Category.ADDED] == ["- added A"]
        assert sections[Category.FIXED] == []
        assert sections.total() == 1

    def test_instances_do_not_share_buckets(self):
        """Two Sections never alias each other."""
        first = Sections()
        second = Sections()
        first[Category.ADDED].append("- added A")

        assert second.is_empty()


class TestRecountChanges:
    """Tests for recount_changes()."""

    def test_empty_sections(self):
        """Empty sections count nothing."""
        assert recount_changes(Sections()) == ChangeCounts(0, 0, 0)

    def test_added_counts_minor(self):
        """Added entries are minor changes."""
        sections = Sections()
        sections[Category.ADDED] = ["- added feature A", "- added feature B"]

        assert recount_changes(sections) == ChangeCounts(major=0, minor=2, patch=0)

    def test_breaking_change_counts_major(self):
        """Breaking change entries are major changes in any category."""
        sections = Sections()
        sections[Category.CHANGED] = ["- **BREAKING CHANGE:** removed API", "- changed minor thing"]

        assert recount_changes(sections) == ChangeCounts(major=1, minor=0, patch=1)

    def test_all_categories(self):
        """Non-Added categories count as patch changes."""
        sections = Sections()
        sections[Category.ADDED] = ["- added A"]
        sections[Category.CHANGED] = ["- changed B"]
        sections[Category.FIXED] = ["- fixed C"]
        sections[Category.REMOVED] = ["- removed D"]
        sections[Category.DEPRECATED] = ["- deprecated E"]
        sections[Category.SECURITY] = ["- security F"]

        assert recount_changes(sections) == ChangeCounts(major=0, minor=1, patch=5)


class TestCalculateBump:
    """Tests for calculate_bump()."""

    def test_major_wins(self):
        """Major beats minor and patch."""
        assert calculate_bump(ChangeCounts(major=1, minor=3, patch=2)) == BumpType.MAJOR

    def test_minor_beats_patch(self):
        """Minor beats patch."""
        assert calculate_bump(ChangeCounts(minor=1, patch=5)) == BumpType.MINOR

    def test_patch(self):
        """Patch-only counts give a patch bump."""
        assert calculate_bump(ChangeCounts(patch=1)) == BumpType.PATCH

    def test_none(self):
        """No changes give no bump."""
        assert calculate_bump(ChangeCounts()) == BumpType.NONE


def test_breaking_change_marker_must_prefix_entry():
    """The marker only counts at the start of the raw line."""
    assert is_breaking_change("- **BREAKING CHANGE:** dropped Python 3.10")
    assert not is_breaking_change("- mention **BREAKING CHANGE:** in docs")
    assert not is_breaking_change("  - **BREAKING CHANGE:** indented")
