"""Tests for catalog filtering and sorting."""

from __future__ import annotations

import pytest

from catalog_hub.catalog.query import FilterSpec, SortKey, apply_query, parse_tags, sort_entries


def _ids(entries):
    return [e.id for e in entries]


class TestDefaults:
    """Tests for an unconstrained query."""

    def test_default_sort_is_popularity(self, sample_entries):
        """No constraints returns everything, most popular first, ties in input order."""
        assert FilterSpec().sort_by is SortKey.POPULARITY
        assert _ids(apply_query(sample_entries, FilterSpec())) == ["resnet", "gpt2", "bert", "vit"]

    def test_explicit_none_keeps_order(self, sample_entries):
        """sort_by=None keeps the catalog's order."""
        assert apply_query(sample_entries, FilterSpec(sort_by=None)) == sample_entries


class TestFilters:
    """Tests for individual constraints."""

    def test_search_is_case_insensitive(self, sample_entries):
        """Search matches name, description and tags."""
        assert _ids(apply_query(sample_entries, FilterSpec(search_term="BERT"))) == ["bert"]
        assert _ids(apply_query(sample_entries, FilterSpec(search_term="image"))) == ["resnet"]
        assert _ids(apply_query(sample_entries, FilterSpec(search_term="JAX"))) == ["vit"]

    def test_category_exact(self, sample_entries):
        """Only entries of the category survive."""
        assert _ids(apply_query(sample_entries, FilterSpec(category="nlp"))) == ["gpt2", "bert"]

    def test_tags_all_must_match(self, sample_entries):
        """Tag constraints use AND."""
        spec = FilterSpec(tags=("transformer", "pytorch"))

        assert _ids(apply_query(sample_entries, spec)) == ["bert"]

    def test_min_popularity_inclusive(self, sample_entries):
        """The minimum is inclusive."""
        assert _ids(apply_query(sample_entries, FilterSpec(min_popularity=900))) == ["resnet", "gpt2"]

    def test_source(self, sample_entries):
        """Source filters on source_name."""
        assert _ids(apply_query(sample_entries, FilterSpec(source="secondary"))) == ["vit"]

    def test_framework(self, sample_entries):
        """Framework matches the normalized framework name."""
        assert _ids(apply_query(sample_entries, FilterSpec(framework="PyTorch"))) == ["resnet", "bert"]

    def test_fine_tuned(self, sample_entries):
        """The fine-tuned flag filters both ways."""
        assert _ids(apply_query(sample_entries, FilterSpec(is_fine_tuned=True))) == ["resnet", "vit"]
        assert _ids(apply_query(sample_entries, FilterSpec(is_fine_tuned=False))) == ["gpt2", "bert"]

    def test_tabular(self, make_entry):
        """Entries without the flag count as not tabular."""
        entries = [make_entry("a", isTabular=True), make_entry("b"), make_entry("c", isTabular=False)]

        assert _ids(apply_query(entries, FilterSpec(is_tabular=True))) == ["a"]
        assert _ids(apply_query(entries, FilterSpec(is_tabular=False))) == ["b", "c"]

    def test_limit(self, sample_entries):
        """Limit truncates after sorting."""
        assert _ids(apply_query(sample_entries, FilterSpec(limit=2))) == ["resnet", "gpt2"]

    def test_input_not_mutated(self, sample_entries):
        """apply_query returns a new list."""
        before = list(sample_entries)
        apply_query(sample_entries, FilterSpec(sort_by=SortKey.NAME))

        assert sample_entries == before


class TestComposition:
    """Tests for combined constraints."""

    def test_and_composition(self, sample_entries):
        """Category, search and sort compose."""
        spec = FilterSpec(search_term="transformer", category="nlp", sort_by=SortKey.RECENCY)

        assert _ids(apply_query(sample_entries, spec)) == ["gpt2", "bert"]

    def test_adding_constraint_only_narrows(self, sample_entries):
        """Each extra constraint yields a subset."""
        broad = apply_query(sample_entries, FilterSpec(tags=("transformer",)))
        narrow = apply_query(sample_entries, FilterSpec(tags=("transformer",), min_popularity=500))
        narrower = apply_query(
            sample_entries, FilterSpec(tags=("transformer",), min_popularity=500, framework="PyTorch")
        )

        assert set(_ids(narrower)) <= set(_ids(narrow)) <= set(_ids(broad))
        assert _ids(narrow) == ["gpt2", "bert"]
        assert _ids(narrower) == ["bert"]


class TestSorting:
    """Tests for sort orders."""

    def test_popularity_descending_stable(self, sample_entries):
        """Ties keep their input order."""
        assert _ids(sort_entries(sample_entries, SortKey.POPULARITY)) == ["resnet", "gpt2", "bert", "vit"]

    def test_recency_descending(self, sample_entries):
        """Newest first."""
        assert _ids(sort_entries(sample_entries, SortKey.RECENCY)) == ["vit", "gpt2", "bert", "resnet"]

    def test_name_case_insensitive(self, sample_entries):
        """Names sort ignoring case."""
        assert _ids(sort_entries(sample_entries, SortKey.NAME)) == ["bert", "gpt2", "resnet", "vit"]

    def test_name_ties_stable(self, make_entry):
        """Equal names keep input order."""
        entries = [make_entry("b", name="same"), make_entry("a", name="Same")]

        assert _ids(sort_entries(entries, SortKey.NAME)) == ["b", "a"]

    def test_likes_descending_stable(self, sample_entries):
        """Most liked first; equal likes keep input order."""
        assert _ids(sort_entries(sample_entries, SortKey.LIKES)) == ["gpt2", "bert", "vit", "resnet"]

    def test_usability_missing_sorts_last(self, make_entry):
        """Entries without a usability score rank below scored ones."""
        entries = [make_entry("a"), make_entry("b", usability=0.7), make_entry("c", usability=0.9)]

        assert _ids(sort_entries(entries, SortKey.USABILITY)) == ["c", "b", "a"]


class TestFromParams:
    """Tests for building specs from query-string values."""

    def test_parse_tags(self):
        """Blanks and whitespace are dropped."""
        assert parse_tags(" nlp, ,pytorch ") == ("nlp", "pytorch")
        assert parse_tags(None) == ()

    def test_from_params(self):
        """Strings are converted to typed fields."""
        spec = FilterSpec.from_params(
            search="  bert ", tags="a,b", min_popularity=None, sort_by="recency",
            framework="PyTorch", is_fine_tuned=True,
        )

        assert spec.search_term == "bert"
        assert spec.tags == ("a", "b")
        assert spec.min_popularity == 0
        assert spec.sort_by is SortKey.RECENCY
        assert spec.framework == "PyTorch"
        assert spec.is_fine_tuned is True
        assert spec.is_tabular is None
        assert spec.to_dict()["sortBy"] == "recency"

    def test_missing_sort_defaults_to_popularity(self):
        """No sortBy means popularity."""
        assert FilterSpec.from_params().sort_by is SortKey.POPULARITY

    def test_blank_search_ignored(self):
        """Whitespace-only search does not constrain."""
        assert FilterSpec.from_params(search="   ").search_term is None

    def test_unknown_sort_rejected(self):
        """Sort keys are validated."""
        with pytest.raises(ValueError):
            FilterSpec.from_params(sort_by="stars")
