"""Collapse entries reported by several sources into one entry per id."""

import logging
from collections.abc import Iterable

from .base import CatalogEntry

logger = logging.getLogger(__name__)


def deduplicate(entries: Iterable[CatalogEntry]) -> list[CatalogEntry]:
    """
    Return one entry per id in a single pass.

    When an id repeats, the later entry replaces the earlier one wholesale
    (no field-level merge). The surviving entry keeps the position of the
    first occurrence, so output order follows fetcher order.
    """
    merged: dict[str, CatalogEntry] = {}
    total = 0
    for entry in entries:
        total += 1
        merged[entry.id] = entry

    if total != len(merged):
        logger.debug(f"Deduplicated {total} entries into {len(merged)}")
    return list(merged.values())
