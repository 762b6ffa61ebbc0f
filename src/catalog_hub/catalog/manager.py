"""
Catalog registry - resolves catalog names to their AggregateCache.

Provides:
- One lazily constructed cache per catalog name
- getCatalog / queryCatalog entry points for the web layer
- Default catalog wiring (sources, staleness thresholds) from Settings
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Optional

from ..config import Settings
from .base import CatalogEntry, SourceFetcher
from .cache import DAY, HOUR, AggregateCache, Clock
from .errors import UnknownCatalogError
from .providers import (
    GitHubPinnedFetcher,
    GitHubSearchFetcher,
    HuggingFaceDatasetFetcher,
    HuggingFaceModelFetcher,
    KaggleDatasetFetcher,
    PublicDatasetFetcher,
)
from .providers.github import DEFAULT_TOPIC_QUERIES
from .query import FilterSpec, apply_query

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogDefinition:
    """How to build one catalog's cache."""

    name: str
    description: str
    stale_threshold: float
    fetchers: Callable[[], Sequence[SourceFetcher]]


def default_definitions(settings: Settings) -> list[CatalogDefinition]:
    """
    The marketplace catalogs.

    Fetcher order matters: on an id collision the later fetcher wins.
    """
    return [
        CatalogDefinition(
            name="datasets",
            description="Datasets from Kaggle, the Hugging Face Hub and public research releases",
            stale_threshold=DAY,
            fetchers=lambda: [
                KaggleDatasetFetcher(settings.kaggle_username, settings.kaggle_key, sort_by="hottest"),
                HuggingFaceDatasetFetcher(token=settings.huggingface_token),
                PublicDatasetFetcher(),
            ],
        ),
        CatalogDefinition(
            name="repositories",
            description="Popular open-source AI/ML repositories on GitHub",
            stale_threshold=HOUR,
            fetchers=lambda: [
                *(GitHubSearchFetcher(q, token=settings.github_token) for q in DEFAULT_TOPIC_QUERIES),
                GitHubPinnedFetcher(token=settings.github_token),
            ],
        ),
        CatalogDefinition(
            name="models",
            description="AI models from the Hugging Face Hub",
            stale_threshold=DAY,
            fetchers=lambda: [
                HuggingFaceModelFetcher(token=settings.huggingface_token, sort="downloads", source_id="hub_downloads"),
                HuggingFaceModelFetcher(token=settings.huggingface_token, sort="likes", source_id="hub_trending"),
            ],
        ),
        CatalogDefinition(
            name="kaggle",
            description="Kaggle datasets by votes and by recent activity",
            stale_threshold=DAY,
            fetchers=lambda: [
                KaggleDatasetFetcher(
                    settings.kaggle_username, settings.kaggle_key, sort_by="votes", source_id="kaggle_popular"
                ),
                KaggleDatasetFetcher(
                    settings.kaggle_username, settings.kaggle_key, sort_by="updated", source_id="kaggle_recent"
                ),
            ],
        ),
    ]


class CatalogRegistry:
    """
    Owns one AggregateCache per catalog.

    Caches are built on first access. Tests can pass their own definitions
    and clock instead of touching module globals.
    """

    def __init__(
        self,
        definitions: Sequence[CatalogDefinition],
        fetch_timeout: float = 15.0,
        max_entries: Optional[int] = None,
        clock: Optional[Clock] = None,
    ):
        self._definitions = {d.name: d for d in definitions}
        self.fetch_timeout = fetch_timeout
        self.max_entries = max_entries
        self._clock = clock
        self._caches: dict[str, AggregateCache] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "CatalogRegistry":
        return cls(
            default_definitions(settings),
            fetch_timeout=settings.fetch_timeout,
            max_entries=settings.max_entries,
        )

    @property
    def names(self) -> list[str]:
        return list(self._definitions)

    def definition(self, name: str) -> CatalogDefinition:
        try:
            return self._definitions[name]
        except KeyError:
            raise UnknownCatalogError(name) from None

    def cache(self, name: str) -> AggregateCache:
        """Get or create the cache for a catalog."""
        cache = self._caches.get(name)
        if cache is None:
            definition = self.definition(name)
            kwargs = {"clock": self._clock} if self._clock is not None else {}
            cache = AggregateCache(
                name=definition.name,
                fetchers=definition.fetchers(),
                stale_threshold=definition.stale_threshold,
                fetch_timeout=self.fetch_timeout,
                max_entries=self.max_entries,
                **kwargs,
            )
            logger.info(f"[CatalogRegistry] Created cache '{name}' with {len(cache.fetchers)} sources")
            self._caches[name] = cache
        return cache

    async def get_catalog(self, name: str, force_refresh: bool = False) -> list[CatalogEntry]:
        """Read-through access to a catalog's current entries."""
        return await self.cache(name).get(force_refresh=force_refresh)

    async def query_catalog(
        self,
        name: str,
        spec: FilterSpec,
        force_refresh: bool = False,
    ) -> list[CatalogEntry]:
        """get_catalog() followed by filter + sort."""
        entries = await self.get_catalog(name, force_refresh=force_refresh)
        return apply_query(entries, spec)

    def describe(self) -> list[dict]:
        """Catalog listing for the web layer; does not trigger refreshes."""
        described = []
        for name, definition in self._definitions.items():
            cache = self._caches.get(name)
            described.append({
                "name": name,
                "description": definition.description,
                "staleThresholdSeconds": definition.stale_threshold,
                "loaded": cache is not None,
                "count": len(cache.state.entries) if cache else 0,
                "lastUpdated": cache.last_updated.isoformat() if cache else None,
            })
        return described


# Default registry used by the web layer
_registry: Optional[CatalogRegistry] = None


def get_catalog_registry() -> CatalogRegistry:
    """Get or create the default CatalogRegistry."""
    global _registry
    if _registry is None:
        _registry = CatalogRegistry.from_settings(Settings.from_env())
    return _registry


async def get_catalog(name: str, force_refresh: bool = False) -> list[CatalogEntry]:
    return await get_catalog_registry().get_catalog(name, force_refresh=force_refresh)


async def query_catalog(name: str, spec: FilterSpec, force_refresh: bool = False) -> list[CatalogEntry]:
    return await get_catalog_registry().query_catalog(name, spec, force_refresh=force_refresh)
