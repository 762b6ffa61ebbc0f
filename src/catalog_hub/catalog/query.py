"""
Filter and sort catalog entries.

apply_query() is stateless: it never mutates its input and returns a new
list. All constraints compose by logical AND.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .base import CatalogEntry


class SortKey(str, Enum):
    """Supported sort orders."""

    POPULARITY = "popularity"  # popularity, descending
    RECENCY = "recency"        # last_updated, descending
    NAME = "name"              # name, ascending, case-insensitive
    LIKES = "likes"            # extras['likes'], descending (models)
    USABILITY = "usability"    # extras['usability'], descending (Kaggle)


@dataclass(frozen=True)
class FilterSpec:
    """Query constraints. A field left at its default does not constrain."""

    search_term: Optional[str] = None
    category: Optional[str] = None
    tags: tuple[str, ...] = ()
    min_popularity: int = 0
    sort_by: Optional[SortKey] = SortKey.POPULARITY  # None keeps the catalog's current order
    source: Optional[str] = None
    limit: Optional[int] = None

    # Catalog-specific, matched against entry extras
    framework: Optional[str] = None
    is_fine_tuned: Optional[bool] = None
    is_tabular: Optional[bool] = None

    @classmethod
    def from_params(
        cls,
        search: Optional[str] = None,
        category: Optional[str] = None,
        tags: Optional[str] = None,
        min_popularity: Optional[int] = None,
        sort_by: Optional[str] = None,
        source: Optional[str] = None,
        limit: Optional[int] = None,
        framework: Optional[str] = None,
        is_fine_tuned: Optional[bool] = None,
        is_tabular: Optional[bool] = None,
    ) -> FilterSpec:
        """Build a spec from HTTP query-string values (tags comma-separated)."""
        return cls(
            search_term=search.strip() if search and search.strip() else None,
            category=category or None,
            tags=parse_tags(tags),
            min_popularity=min_popularity or 0,
            sort_by=SortKey(sort_by) if sort_by else SortKey.POPULARITY,
            source=source or None,
            limit=limit,
            framework=framework or None,
            is_fine_tuned=is_fine_tuned,
            is_tabular=is_tabular,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "search": self.search_term,
            "category": self.category,
            "tags": list(self.tags),
            "minPopularity": self.min_popularity,
            "sortBy": self.sort_by.value if self.sort_by else None,
            "source": self.source,
            "limit": self.limit,
            "framework": self.framework,
            "isFineTuned": self.is_fine_tuned,
            "isTabular": self.is_tabular,
        }


def parse_tags(value: Optional[str]) -> tuple[str, ...]:
    """Split a comma-separated tag list, dropping blanks."""
    if not value:
        return ()
    return tuple(t.strip() for t in value.split(",") if t.strip())


def _extra_number(entry: CatalogEntry, key: str) -> float:
    value = entry.extras.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


# =========================
# Predicates
# =========================

def matches_search(entry: CatalogEntry, term: Optional[str]) -> bool:
    """Case-insensitive substring match on name, description or any tag."""
    if not term:
        return True
    needle = term.lower()
    return (
        needle in entry.name.lower()
        or needle in entry.description.lower()
        or any(needle in tag.lower() for tag in entry.tags)
    )


def matches_category(entry: CatalogEntry, category: Optional[str]) -> bool:
    return not category or entry.category == category


def matches_tags(entry: CatalogEntry, tags: Sequence[str]) -> bool:
    """Entry must carry every requested tag."""
    if not tags:
        return True
    entry_tags = set(entry.tags)
    return all(tag in entry_tags for tag in tags)


def matches_popularity(entry: CatalogEntry, min_popularity: int) -> bool:
    return entry.popularity >= min_popularity


def matches_source(entry: CatalogEntry, source: Optional[str]) -> bool:
    return not source or entry.source_name == source


def matches_framework(entry: CatalogEntry, framework: Optional[str]) -> bool:
    return not framework or entry.extras.get("framework") == framework


def matches_flag(entry: CatalogEntry, key: str, expected: Optional[bool]) -> bool:
    """None means no constraint; entries without the flag count as False."""
    return expected is None or bool(entry.extras.get(key)) is expected


def _predicates(spec: FilterSpec) -> list[Callable[[CatalogEntry], bool]]:
    """Active predicates, cheapest first."""
    predicates: list[Callable[[CatalogEntry], bool]] = []
    if spec.min_popularity > 0:
        predicates.append(lambda e: matches_popularity(e, spec.min_popularity))
    if spec.category:
        predicates.append(lambda e: matches_category(e, spec.category))
    if spec.source:
        predicates.append(lambda e: matches_source(e, spec.source))
    if spec.is_fine_tuned is not None:
        predicates.append(lambda e: matches_flag(e, "isFineTuned", spec.is_fine_tuned))
    if spec.is_tabular is not None:
        predicates.append(lambda e: matches_flag(e, "isTabular", spec.is_tabular))
    if spec.framework:
        predicates.append(lambda e: matches_framework(e, spec.framework))
    if spec.tags:
        predicates.append(lambda e: matches_tags(e, spec.tags))
    if spec.search_term:
        predicates.append(lambda e: matches_search(e, spec.search_term))
    return predicates


# =========================
# Ranking
# =========================

def sort_entries(entries: Iterable[CatalogEntry], sort_by: Optional[SortKey]) -> list[CatalogEntry]:
    """Stable sort; ties keep their input order."""
    if sort_by is None:
        return list(entries)
    if sort_by == SortKey.POPULARITY:
        key_fn = lambda e: -e.popularity
    elif sort_by == SortKey.RECENCY:
        key_fn = lambda e: -e.last_updated.timestamp()
    elif sort_by == SortKey.NAME:
        key_fn = lambda e: e.name.casefold()
    elif sort_by == SortKey.LIKES:
        key_fn = lambda e: -_extra_number(e, "likes")
    elif sort_by == SortKey.USABILITY:
        key_fn = lambda e: -_extra_number(e, "usability")
    else:
        raise ValueError(f"Unknown sort_by={sort_by!r}, expected one of {[k.value for k in SortKey]}")
    return sorted(entries, key=key_fn)


def apply_query(entries: Iterable[CatalogEntry], spec: FilterSpec) -> list[CatalogEntry]:
    """Filter entries by every active constraint in spec, then sort and truncate."""
    predicates = _predicates(spec)
    filtered = [e for e in entries if all(p(e) for p in predicates)]
    ranked = sort_entries(filtered, spec.sort_by)
    if spec.limit is not None:
        ranked = ranked[: max(spec.limit, 0)]
    return ranked
