"""
Public dataset provider.

Well-known datasets hosted outside Kaggle and the Hugging Face Hub have no
common listing API, so this provider serves a curated static subset.
"""

import logging

from ..base import CatalogEntry, SourceFetcher
from ..fallback import PUBLIC_DATASETS
from ..normalizers import normalize_batch, normalize_static_record

logger = logging.getLogger(__name__)


class PublicDatasetFetcher(SourceFetcher):
    """Curated public datasets (university and corporate research releases)."""

    def __init__(self, records: list[dict] = PUBLIC_DATASETS):
        self._records = records

    @property
    def id(self) -> str:
        return "public"

    @property
    def name(self) -> str:
        return "Public Datasets"

    async def fetch(self) -> list[CatalogEntry]:
        entries = normalize_batch(self._records, normalize_static_record, self.source_name)
        logger.info(f"[{self.name}] Serving {len(entries)} curated datasets")
        return entries
