"""Tests for upstream record normalizers."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from catalog_hub.catalog.base import EPOCH, CatalogEntry, to_utc_datetime
from catalog_hub.catalog.errors import NormalizationError
from catalog_hub.catalog.normalizers import (
    format_size,
    infer_dataset_category,
    infer_framework,
    normalize_batch,
    normalize_github_repo,
    normalize_huggingface_dataset,
    normalize_huggingface_model,
    normalize_kaggle_dataset,
    normalize_static_record,
)


class TestTimestamps:
    """Tests for timestamp coercion."""

    def test_iso_with_z(self):
        """A trailing Z parses as UTC."""
        assert to_utc_datetime("2023-01-15T10:00:00Z") == datetime(2023, 1, 15, 10, tzinfo=timezone.utc)

    def test_epoch_seconds(self):
        """Numbers are epoch seconds."""
        assert to_utc_datetime(0) == EPOCH

    def test_garbage_becomes_epoch(self):
        """Unparseable values do not raise."""
        assert to_utc_datetime("not a date") == EPOCH
        assert to_utc_datetime(None) == EPOCH
        assert to_utc_datetime(True) == EPOCH


class TestKaggle:
    """Tests for Kaggle dataset records."""

    def test_full_record(self):
        """Fields map onto the canonical entry."""
        entry = normalize_kaggle_dataset(
            {
                "ref": "Kazanova/Sentiment140",
                "title": "Sentiment140",
                "subtitle": "1.6 million tweets",
                "url": "/datasets/kazanova/sentiment140",
                "downloadCount": 120000,
                "voteCount": 3000,
                "lastUpdated": "2023-03-01T00:00:00Z",
                "totalBytes": 85 * 1024 * 1024,
                "tags": [{"name": "nlp"}, {"name": "text"}],
                "ownerName": "KazAnova",
                "licenseName": "other",
            },
            "kaggle",
        )

        assert entry.id == "kaggle:kazanova/sentiment140"
        assert entry.name == "Sentiment140"
        assert entry.source_name == "kaggle"
        assert entry.description == "1.6 million tweets"
        assert entry.tags == ("nlp", "text")
        assert entry.category == "nlp"
        assert entry.popularity == 120000
        assert entry.url == "https://www.kaggle.com/datasets/kazanova/sentiment140"
        assert entry.extras["size"] == "85 MB"
        assert entry.extras["owner"] == "KazAnova"
        assert entry.extras["voteCount"] == 3000

    def test_defaults_for_missing_fields(self):
        """Optional fields fall back to documented defaults."""
        entry = normalize_kaggle_dataset({"ref": "someone/data"}, "kaggle")

        assert entry.name == "someone/data"
        assert entry.description == ""
        assert entry.popularity == 0
        assert entry.last_updated == EPOCH
        assert entry.extras["owner"] == "Unknown"
        assert entry.extras["license"] == "Unknown"
        assert entry.extras["size"] == "Unknown"
        assert entry.url == "https://www.kaggle.com/datasets/someone/data"

    def test_tabular_flag(self):
        """isTabular wins over tag inference."""
        entry = normalize_kaggle_dataset({"ref": "a/b", "isTabular": True, "tags": ["image"]}, "kaggle")

        assert entry.category == "tabular"

    def test_missing_ref_raises(self):
        """A record without identity cannot be normalized."""
        with pytest.raises(NormalizationError):
            normalize_kaggle_dataset({"title": "Orphan"}, "kaggle")


class TestHuggingFace:
    """Tests for Hugging Face Hub records."""

    def test_dataset(self):
        """Dataset tags drive category, size and license."""
        entry = normalize_huggingface_dataset(
            {
                "id": "glue",
                "author": "nyu-mll",
                "downloads": 500,
                "likes": 12,
                "tags": ["task_categories:text-classification", "modality:text",
                         "size_categories:100K<n<1M", "license:cc-by-4.0"],
                "cardData": {"pretty_name": "GLUE"},
            },
            "huggingface",
        )

        assert entry.id == "hf-dataset:glue"
        assert entry.name == "GLUE"
        assert entry.category == "nlp"
        assert entry.url == "https://huggingface.co/datasets/glue"
        assert entry.extras["size"] == "100K<n<1M"
        assert entry.extras["license"] == "cc-by-4.0"
        assert entry.extras["likes"] == 12

    def test_dataset_without_category_tags(self):
        """No recognizable tag gives 'other'."""
        entry = normalize_huggingface_dataset({"id": "misc"}, "huggingface")

        assert entry.category == "other"
        assert entry.extras["owner"] == "Unknown"

    def test_model(self):
        """Model records pick up pipeline, framework and owner."""
        entry = normalize_huggingface_model(
            {
                "modelId": "bert-base-uncased",
                "pipeline_tag": "fill-mask",
                "downloads": 1000,
                "likes": 10,
                "tags": ["transformers", "pytorch", "license:apache-2.0"],
                "lastModified": "2023-01-15T10:00:00.000Z",
            },
            "hub_downloads",
        )

        assert entry.id == "hf-model:bert-base-uncased"
        assert entry.category == "fill-mask"
        assert entry.popularity == 1000
        assert entry.last_updated == datetime(2023, 1, 15, 10, tzinfo=timezone.utc)
        assert entry.extras["framework"] == "PyTorch"
        assert entry.extras["license"] == "apache-2.0"
        assert entry.extras["owner"] == "Unknown"
        assert entry.extras["isFineTuned"] is False

    def test_model_defaults(self):
        """Missing pipeline_tag gives category 'Unknown'."""
        entry = normalize_huggingface_model({"id": "org/model", "cardData": {"base_model": "x"}}, "hub")

        assert entry.category == "Unknown"
        assert entry.extras["owner"] == "org"
        assert entry.extras["isFineTuned"] is True
        assert entry.extras["size"] == "Unknown"

    def test_model_without_id_raises(self):
        """Identity is required."""
        with pytest.raises(NormalizationError):
            normalize_huggingface_model({"downloads": 3}, "hub")


class TestGitHub:
    """Tests for GitHub repository records."""

    def test_repository(self):
        """Stars are popularity and language is the category."""
        entry = normalize_github_repo(
            {
                "full_name": "PyTorch/PyTorch",
                "name": "pytorch",
                "description": "Tensors and dynamic neural networks",
                "html_url": "https://github.com/pytorch/pytorch",
                "stargazers_count": 70000,
                "forks_count": 19000,
                "language": "Python",
                "topics": ["deep-learning", "machine-learning"],
                "updated_at": "2023-06-01T00:00:00Z",
                "owner": {"login": "pytorch", "avatar_url": "https://avatars.example/pt"},
                "license": {"key": "other", "name": "Other", "spdx_id": "NOASSERTION"},
            },
            "github_search",
        )

        assert entry.id == "github:pytorch/pytorch"
        assert entry.category == "Python"
        assert entry.popularity == 70000
        assert entry.tags == ("deep-learning", "machine-learning")
        assert entry.extras["forks"] == 19000
        assert entry.extras["owner"]["login"] == "pytorch"
        assert entry.extras["license"]["name"] == "Other"
        assert entry.extras["isOpenSource"] is False

    def test_open_source_licence(self):
        """MIT counts as open source."""
        entry = normalize_github_repo(
            {"full_name": "a/b", "license": {"spdx_id": "MIT", "name": "MIT License"}},
            "github_pinned",
        )

        assert entry.extras["isOpenSource"] is True
        assert entry.category == "Unknown"
        assert entry.name == "b"

    def test_invalid_full_name(self):
        """full_name must be owner/repo."""
        with pytest.raises(NormalizationError):
            normalize_github_repo({"full_name": "noslash"}, "github_search")


class TestStaticRecords:
    """Tests for bundled records."""

    def test_infers_category_from_tags(self):
        """An Unknown category is inferred from tags."""
        entry = normalize_static_record({"id": "public:x", "name": "X", "tags": ["images"]}, "public")

        assert entry.category == "vision"
        assert entry.source_name == "public"

    def test_round_trip_shape(self):
        """to_dict output is accepted back."""
        original = CatalogEntry(id="a", name="A", source_name="s", category="nlp", popularity=5)

        assert normalize_static_record(original.to_dict(), "s") == original


class TestHelpers:
    """Tests for inference helpers."""

    @pytest.mark.parametrize("tags,expected", [
        (["Computer Vision"], "vision"),
        (["speech"], "audio"),
        (["time-series"], "tabular"),
        (["cooking"], "other"),
    ])
    def test_infer_dataset_category(self, tags, expected):
        """Tags map onto coarse domains."""
        assert infer_dataset_category(tags) == expected

    def test_infer_framework(self):
        """Known framework tags are recognized."""
        assert infer_framework(["tf"]) == "TensorFlow"
        assert infer_framework(["flax"]) == "JAX/Flax"
        assert infer_framework([]) == "Unknown"

    def test_format_size(self):
        """Sizes render with a unit."""
        assert format_size(2048) == "2 KB"
        assert format_size(3 * 1024 ** 3) == "3.0 GB"
        assert format_size(None) == "Unknown"


class TestBatch:
    """Tests for batch normalization."""

    def test_drops_bad_records(self, caplog):
        """Bad records are logged and skipped, good ones kept in order."""
        records = [{"full_name": "a/one"}, "not a dict", {"full_name": "bad"}, {"full_name": "a/two"}]

        with caplog.at_level(logging.WARNING, logger="catalog_hub.catalog.normalizers"):
            entries = normalize_batch(records, normalize_github_repo, "github_search")

        assert [e.id for e in entries] == ["github:a/one", "github:a/two"]
        assert sum("Dropped" in r.getMessage() for r in caplog.records) == 2
