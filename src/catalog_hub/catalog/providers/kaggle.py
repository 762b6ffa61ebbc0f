"""
Kaggle dataset provider.

Fetches dataset listings from the Kaggle public API:
https://www.kaggle.com/api/v1/datasets/list

The API requires a username/key pair (Basic auth). Without credentials the
provider is "not configured" and returns no entries instead of failing.
"""

import logging
from typing import Optional

import aiohttp

from ..base import CatalogEntry, HttpSourceFetcher
from ..normalizers import normalize_batch, normalize_kaggle_dataset

logger = logging.getLogger(__name__)

# Kaggle API configuration
KAGGLE_BASE_URL = "https://www.kaggle.com/api/v1"
DATASETS_ENDPOINT = "/datasets/list"
DEFAULT_MAX_PAGES = 2  # Kaggle pages hold 20 datasets
SORT_OPTIONS = ("hottest", "votes", "updated", "active", "published")


class KaggleDatasetFetcher(HttpSourceFetcher):
    """
    Lists Kaggle datasets in one sort order.

    Several instances with different sort orders can feed the same catalog;
    they share the 'kaggle:<ref>' id scheme so overlaps collapse in dedup.
    """

    def __init__(
        self,
        username: Optional[str],
        key: Optional[str],
        sort_by: str = "hottest",
        source_id: str = "kaggle",
        max_pages: int = DEFAULT_MAX_PAGES,
        search: Optional[str] = None,
    ):
        if sort_by not in SORT_OPTIONS:
            raise ValueError(f"Unknown Kaggle sort_by={sort_by!r}, expected one of {SORT_OPTIONS}")
        self._username = username
        self._key = key
        self.sort_by = sort_by
        self._source_id = source_id
        self.max_pages = max_pages
        self.search = search

    @property
    def id(self) -> str:
        return self._source_id

    @property
    def name(self) -> str:
        return f"Kaggle Datasets ({self.sort_by})"

    @property
    def configured(self) -> bool:
        return bool(self._username and self._key)

    def _auth(self) -> Optional[aiohttp.BasicAuth]:
        if not self.configured:
            return None
        return aiohttp.BasicAuth(self._username, self._key)

    async def fetch(self) -> list[CatalogEntry]:
        """Fetch dataset pages until an empty page or the page cap."""
        if not self.configured:
            logger.info(f"[{self.name}] KAGGLE_USERNAME/KAGGLE_KEY not set, skipping")
            return []

        entries: list[CatalogEntry] = []
        url = f"{KAGGLE_BASE_URL}{DATASETS_ENDPOINT}"
        async with self._session() as session:
            for page in range(1, self.max_pages + 1):
                params = {"sortBy": self.sort_by, "page": str(page)}
                if self.search:
                    params["search"] = self.search
                logger.info(f"[{self.name}] Fetching: {url} (page {page})")

                data = await self._request_json(session, url, params)
                records = data if isinstance(data, list) else []
                if not records:
                    break
                entries.extend(normalize_batch(records, normalize_kaggle_dataset, self.source_name))

        logger.info(f"[{self.name}] Total: {len(entries)} datasets")
        return entries
