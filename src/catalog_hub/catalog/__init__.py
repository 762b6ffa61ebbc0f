"""
Aggregated marketplace catalogs.

Each catalog (datasets, repositories, models, kaggle) caches entries pulled
from several upstream sources, refreshes them when stale, and serves
filter + sort queries over the merged result.
"""

from .base import CatalogEntry, HttpSourceFetcher, SourceFetcher, SourceStatus
from .cache import AggregateCache, CacheState, is_stale
from .dedup import deduplicate
from .errors import (
    CatalogError,
    MalformedFallbackData,
    NormalizationError,
    SourceUnavailable,
    TotalSourceFailure,
    UnknownCatalogError,
)
from .manager import (
    CatalogDefinition,
    CatalogRegistry,
    get_catalog,
    get_catalog_registry,
    query_catalog,
)
from .query import FilterSpec, SortKey, apply_query

__all__ = [
    "CatalogEntry",
    "SourceFetcher",
    "HttpSourceFetcher",
    "SourceStatus",
    "AggregateCache",
    "CacheState",
    "is_stale",
    "deduplicate",
    "CatalogError",
    "SourceUnavailable",
    "TotalSourceFailure",
    "NormalizationError",
    "MalformedFallbackData",
    "UnknownCatalogError",
    "CatalogDefinition",
    "CatalogRegistry",
    "get_catalog",
    "get_catalog_registry",
    "query_catalog",
    "FilterSpec",
    "SortKey",
    "apply_query",
]
