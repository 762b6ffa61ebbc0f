"""
Error types for the catalog subsystem.

Only MalformedFallbackData is allowed to escape AggregateCache.get();
everything else is absorbed and logged by the cache.
"""

from collections.abc import Sequence
from typing import Any, Optional


class CatalogError(Exception):
    """Base class for catalog errors."""


class SourceUnavailable(CatalogError):
    """A single source fetcher failed (network, auth, timeout, bad response)."""

    def __init__(self, source_id: str, message: str, status: Optional[int] = None):
        self.source_id = source_id
        self.status = status
        super().__init__(f"[{source_id}] {message}")


class TotalSourceFailure(CatalogError):
    """Every fetcher of a catalog failed in the same refresh cycle."""

    def __init__(self, catalog: str, errors: dict[str, str], sources: Sequence[Any] = ()):
        self.catalog = catalog
        self.errors = errors
        self.sources = tuple(sources)  # SourceStatus per fetcher
        super().__init__(
            f"All {len(errors)} sources failed for catalog '{catalog}': "
            + "; ".join(f"{k}: {v}" for k, v in errors.items())
        )


class NormalizationError(CatalogError):
    """A raw upstream record could not be mapped to a CatalogEntry."""


class MalformedFallbackData(CatalogError):
    """The bundled static fallback set is invalid."""


class UnknownCatalogError(CatalogError, KeyError):
    """No catalog is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown catalog: {name}")

    def __str__(self) -> str:
        return f"Unknown catalog: {self.name}"
