"""
GitHub repository providers.

Two flavours feed the repositories catalog:
- GitHubSearchFetcher: one topic search against /search/repositories
- GitHubPinnedFetcher: a fixed list of well-known repos fetched one by one

Both work unauthenticated (at a low rate limit); GITHUB_API_TOKEN raises it.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Optional

from ..base import CatalogEntry, HttpSourceFetcher
from ..errors import SourceUnavailable
from ..normalizers import normalize_batch, normalize_github_repo

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
SEARCH_ENDPOINT = "/search/repositories"
DEFAULT_PER_PAGE = 20
DEFAULT_MIN_STARS = 1000

DEFAULT_TOPIC_QUERIES = (
    "topic:machine-learning topic:open-source",
    "topic:neural-network topic:open-source",
    "topic:deep-learning topic:open-source",
)

DEFAULT_PINNED_REPOS = (
    "tensorflow/tensorflow",
    "pytorch/pytorch",
    "huggingface/transformers",
    "scikit-learn/scikit-learn",
    "keras-team/keras",
)


class _GitHubFetcher(HttpSourceFetcher):
    """Auth and headers shared by the GitHub providers."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        headers["Accept"] = "application/vnd.github+json"
        headers["X-GitHub-Api-Version"] = "2022-11-28"
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers


class GitHubSearchFetcher(_GitHubFetcher):
    """Top starred repositories matching one search query."""

    def __init__(
        self,
        query: str,
        token: Optional[str] = None,
        min_stars: int = DEFAULT_MIN_STARS,
        per_page: int = DEFAULT_PER_PAGE,
    ):
        super().__init__(token)
        self.query = query
        self.min_stars = min_stars
        self.per_page = per_page

    @property
    def id(self) -> str:
        # 'topic:deep-learning topic:open-source' -> 'github_search:deep-learning'
        first = self.query.split()[0] if self.query.split() else "all"
        return f"github_search:{first.split(':', 1)[-1]}"

    @property
    def name(self) -> str:
        return f"GitHub Search ({self.query})"

    @property
    def source_name(self) -> str:
        return "github_search"

    async def fetch(self) -> list[CatalogEntry]:
        url = f"{GITHUB_API_URL}{SEARCH_ENDPOINT}"
        params = {
            "q": f"{self.query} stars:>{self.min_stars}",
            "sort": "stars",
            "order": "desc",
            "per_page": str(self.per_page),
        }
        logger.info(f"[{self.name}] Fetching: {url}")
        async with self._session() as session:
            data = await self._request_json(session, url, params)

        items = data.get("items", []) if isinstance(data, dict) else []
        entries = normalize_batch(items, normalize_github_repo, self.source_name)
        logger.info(f"[{self.name}] Parsed {len(entries)} repositories")
        return entries


class GitHubPinnedFetcher(_GitHubFetcher):
    """
    Popular frameworks that may not carry the searched topics.

    A single missing repo is logged and skipped; the source only fails when
    none of the repos could be fetched.
    """

    def __init__(self, repos: Sequence[str] = DEFAULT_PINNED_REPOS, token: Optional[str] = None):
        super().__init__(token)
        self.repos = tuple(repos)

    @property
    def id(self) -> str:
        return "github_pinned"

    @property
    def name(self) -> str:
        return "GitHub Pinned Repositories"

    async def fetch(self) -> list[CatalogEntry]:
        if not self.repos:
            return []

        async with self._session() as session:
            results = await asyncio.gather(
                *(self._request_json(session, f"{GITHUB_API_URL}/repos/{full_name}") for full_name in self.repos),
                return_exceptions=True,
            )

        records: list[dict] = []
        failures: list[str] = []
        for full_name, result in zip(self.repos, results):
            if isinstance(result, Exception):
                logger.warning(f"[{self.name}] Error fetching '{full_name}': {result}")
                failures.append(full_name)
            elif isinstance(result, dict):
                records.append(result)

        if failures and not records:
            raise SourceUnavailable(self.id, f"Could not fetch any of {len(failures)} pinned repositories")

        entries = normalize_batch(records, normalize_github_repo, self.source_name)
        logger.info(f"[{self.name}] Fetched {len(entries)}/{len(self.repos)} repositories")
        return entries
