"""Pytest configuration for catalog_hub tests."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

import pytest

from catalog_hub.catalog.base import CatalogEntry, SourceFetcher
from catalog_hub.catalog.errors import SourceUnavailable


def _make_entry(
    entry_id: str,
    name: Optional[str] = None,
    source: str = "primary",
    description: str = "",
    tags: Sequence[str] = (),
    category: str = "nlp",
    popularity: int = 0,
    updated: str = "2023-01-01T00:00:00+00:00",
    **extras,
) -> CatalogEntry:
    return CatalogEntry(
        id=entry_id,
        name=name or entry_id,
        source_name=source,
        description=description,
        tags=tuple(tags),
        category=category,
        popularity=popularity,
        last_updated=datetime.fromisoformat(updated).astimezone(timezone.utc),
        url=f"https://example.com/{entry_id}",
        extras=extras,
    )


class FakeFetcher(SourceFetcher):
    """Returns a fixed list of entries and counts its calls."""

    def __init__(self, source_id: str, entries: Sequence[CatalogEntry] = (), delay: float = 0.0):
        self._id = source_id
        self.entries = list(entries)
        self.delay = delay
        self.calls = 0

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return f"Fake {self._id}"

    async def fetch(self) -> List[CatalogEntry]:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return list(self.entries)


class FailingFetcher(FakeFetcher):
    """Always raises SourceUnavailable."""

    def __init__(self, source_id: str, message: str = "HTTP 503: upstream down"):
        super().__init__(source_id)
        self.message = message

    async def fetch(self) -> List[CatalogEntry]:
        self.calls += 1
        raise SourceUnavailable(self.id, self.message, status=503)


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def make_entry() -> Callable[..., CatalogEntry]:
    """Return a CatalogEntry factory with test-friendly defaults."""
    return _make_entry


@pytest.fixture
def make_entries() -> Callable[[str, int], List[CatalogEntry]]:
    """Return a factory for `count` entries from one source, ids '<prefix>-<i>'."""

    def factory(prefix: str, count: int) -> List[CatalogEntry]:
        return [_make_entry(f"{prefix}-{i}", source=prefix) for i in range(count)]

    return factory


@pytest.fixture
def fake_fetcher() -> Callable[..., FakeFetcher]:
    """Return a factory for fetchers serving fixed entries."""
    return FakeFetcher


@pytest.fixture
def failing_fetcher() -> Callable[..., FailingFetcher]:
    """Return a factory for fetchers that always fail."""
    return FailingFetcher


@pytest.fixture
def clock() -> FakeClock:
    """Return a controllable clock."""
    return FakeClock()


@pytest.fixture
def sample_entries() -> List[CatalogEntry]:
    """Return a small mixed catalog."""
    return [
        _make_entry("bert", name="BERT Base", category="nlp", popularity=500,
                    tags=["transformer", "pytorch"], updated="2023-01-15T10:00:00+00:00",
                    description="Bidirectional encoder",
                    likes=40, framework="PyTorch", isFineTuned=False),
        _make_entry("resnet", name="ResNet-50", category="vision", popularity=900,
                    tags=["cnn", "pytorch"], updated="2022-06-01T00:00:00+00:00",
                    description="Residual network for image classification",
                    likes=10, framework="PyTorch", isFineTuned=True),
        _make_entry("gpt2", name="gpt2", category="nlp", popularity=900,
                    tags=["transformer", "text-generation"], updated="2023-02-10T00:00:00+00:00",
                    description="Generative language model",
                    likes=80, framework="TensorFlow", isFineTuned=False),
        _make_entry("vit", name="ViT", category="vision", popularity=100,
                    tags=["transformer", "jax"], updated="2023-05-01T00:00:00+00:00",
                    description="Vision transformer", source="secondary",
                    likes=40, framework="JAX/Flax", isFineTuned=True),
    ]
