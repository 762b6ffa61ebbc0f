"""
Hugging Face Hub provider.

Fetches dataset and model listings from:
https://huggingface.co/api/datasets
https://huggingface.co/api/models

Anonymous access works; HF_API_TOKEN only raises rate limits.
"""

import logging
from typing import Optional

from ..base import CatalogEntry, HttpSourceFetcher
from ..normalizers import (
    Normalizer,
    normalize_batch,
    normalize_huggingface_dataset,
    normalize_huggingface_model,
)

logger = logging.getLogger(__name__)

HUB_BASE_URL = "https://huggingface.co/api"
DEFAULT_LIMIT = 50


class _HubListingFetcher(HttpSourceFetcher):
    """Shared request shaping for Hub listing endpoints."""

    endpoint: str = ""
    kind: str = ""
    normalizer: Normalizer

    def __init__(
        self,
        source_id: str,
        token: Optional[str] = None,
        sort: str = "downloads",
        limit: int = DEFAULT_LIMIT,
    ):
        self._source_id = source_id
        self._token = token
        self.sort = sort
        self.limit = limit

    @property
    def id(self) -> str:
        return self._source_id

    @property
    def name(self) -> str:
        return f"Hugging Face {self.kind} ({self.sort})"

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _params(self) -> dict[str, str]:
        return {
            "sort": self.sort,
            "direction": "-1",
            "limit": str(self.limit),
            "full": "true",
        }

    async def fetch(self) -> list[CatalogEntry]:
        url = f"{HUB_BASE_URL}{self.endpoint}"
        logger.info(f"[{self.name}] Fetching: {url}")
        async with self._session() as session:
            data = await self._request_json(session, url, self._params())

        records = data if isinstance(data, list) else []
        entries = normalize_batch(records, type(self).normalizer, self.source_name)
        logger.info(f"[{self.name}] Parsed {len(entries)} {self.kind.lower()}")
        return entries


class HuggingFaceDatasetFetcher(_HubListingFetcher):
    """Most downloaded datasets on the Hub."""

    endpoint = "/datasets"
    kind = "Datasets"
    normalizer = staticmethod(normalize_huggingface_dataset)

    def __init__(self, token: Optional[str] = None, source_id: str = "huggingface", **kwargs):
        super().__init__(source_id, token=token, **kwargs)


class HuggingFaceModelFetcher(_HubListingFetcher):
    """Hub models in one sort order (downloads, likes, lastModified...)."""

    endpoint = "/models"
    kind = "Models"
    normalizer = staticmethod(normalize_huggingface_model)

    def __init__(self, token: Optional[str] = None, source_id: str = "hub_downloads", **kwargs):
        super().__init__(source_id, token=token, **kwargs)
