"""Tests for entry deduplication."""

from __future__ import annotations

from catalog_hub.catalog.dedup import deduplicate


class TestDeduplicate:
    """Tests for deduplicate()."""

    def test_later_entry_wins(self, make_entry):
        """The last occurrence replaces the whole record."""
        entries = [
            make_entry("x", popularity=10, source="a", description="old"),
            make_entry("x", popularity=50, source="b", description="new"),
        ]

        result = deduplicate(entries)

        assert len(result) == 1
        assert result[0].popularity == 50
        assert result[0].description == "new"
        assert result[0].source_name == "b"

    def test_first_position_kept(self, make_entry):
        """A replaced entry stays where the id first appeared."""
        entries = [
            make_entry("x", popularity=1),
            make_entry("y"),
            make_entry("z"),
            make_entry("x", popularity=2),
        ]

        result = deduplicate(entries)

        assert [e.id for e in result] == ["x", "y", "z"]
        assert result[0].popularity == 2

    def test_unique_ids_untouched(self, sample_entries):
        """Distinct ids pass through in order."""
        assert deduplicate(sample_entries) == sample_entries

    def test_empty(self):
        """Nothing in, nothing out."""
        assert deduplicate([]) == []
