"""
Base classes for catalog sources.

To add a new source:
1. Create a new file under providers/ (e.g., my_source.py)
2. Subclass SourceFetcher (or HttpSourceFetcher for JSON APIs)
3. Implement fetch()
4. Register it for a catalog in manager.py
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional
import logging
import time

import aiohttp

from .errors import SourceUnavailable

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
USER_AGENT = "catalog-hub/0.1"
DEFAULT_REQUEST_TIMEOUT = 20  # seconds, per HTTP request


def to_utc_datetime(value: Any) -> datetime:
    """
    Coerce an upstream timestamp into an aware UTC datetime.

    Accepts datetimes, epoch seconds and ISO-8601 strings (with or without a
    trailing 'Z'). Anything unparseable becomes the epoch.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, bool):
        return EPOCH
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return EPOCH
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return EPOCH
        return to_utc_datetime(parsed)
    return EPOCH


@dataclass(frozen=True)
class CatalogEntry:
    """Normalized representation of one catalog resource from any source."""

    id: str
    name: str
    source_name: str  # Fetcher that produced it (e.g. 'kaggle', 'github_search')

    description: str = ""
    tags: tuple[str, ...] = ()
    category: str = "Unknown"
    popularity: int = 0  # downloads / stars
    last_updated: datetime = EPOCH
    url: str = ""

    # Catalog-specific display attributes (size, owner, license, language...)
    extras: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "sourceName": self.source_name,
            "tags": list(self.tags),
            "category": self.category,
            "popularityMetric": self.popularity,
            "lastUpdated": self.last_updated.isoformat(),
            "url": self.url,
            **self.extras,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CatalogEntry":
        """Build an entry from the to_dict() shape (snake_case keys also accepted)."""
        known = {
            "id", "name", "title", "description", "sourceName", "source_name",
            "tags", "category", "popularityMetric", "popularity", "lastUpdated",
            "last_updated", "url", "extras",
        }
        extras = dict(data.get("extras") or {})
        extras.update({k: v for k, v in data.items() if k not in known})
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or data.get("title") or ""),
            source_name=str(data.get("sourceName") or data.get("source_name") or ""),
            description=str(data.get("description") or ""),
            tags=tuple(str(t) for t in data.get("tags") or ()),
            category=str(data.get("category") or "Unknown"),
            popularity=int(data.get("popularityMetric", data.get("popularity")) or 0),
            last_updated=to_utc_datetime(data.get("lastUpdated", data.get("last_updated"))),
            url=str(data.get("url") or ""),
            extras=extras,
        )


@dataclass
class SourceStatus:
    """Outcome of one fetcher during the most recent refresh."""

    source_id: str
    source_name: str
    ok: bool
    count: int = 0
    error: Optional[str] = None
    duration: float = 0.0
    fetched_at: float = field(default_factory=time.time)

    def to_status_dict(self) -> dict:
        """Convert to status dictionary for the web layer."""
        return {
            "id": self.source_id,
            "name": self.source_name,
            "ok": self.ok,
            "count": self.count if self.ok else None,
            "error": self.error,
            "durationMs": int(self.duration * 1000),
            "fetchedAt": int(self.fetched_at * 1000),
        }


def generate_entry_id(namespace: str, *parts: str) -> str:
    """
    Build the stable identity key for an entry.

    The key depends only on the logical resource, never on which fetcher saw
    it, so two sources reporting the same resource collapse in dedup.
    """
    key = "/".join(p.strip().lower() for p in parts if p and p.strip())
    return f"{namespace}:{key}"


class SourceFetcher(ABC):
    """
    Abstract base class for catalog sources.

    Each fetcher retrieves the current listing of a single upstream provider.
    fetch() may raise; the cache is responsible for isolating failures.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique identifier for this fetcher within its catalog."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name (e.g., 'Hugging Face Datasets')."""
        pass

    @property
    def source_name(self) -> str:
        """Value recorded as CatalogEntry.source_name."""
        return self.id

    @abstractmethod
    async def fetch(self) -> list[CatalogEntry]:
        """
        Fetch entries from this source.

        Returns:
            Normalized entries. An unconfigured source returns an empty list.

        Raises:
            SourceUnavailable: on network, auth or upstream failures
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"


class HttpSourceFetcher(SourceFetcher):
    """SourceFetcher backed by a JSON-over-HTTP listing API."""

    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json", "User-Agent": USER_AGENT}

    def _auth(self) -> Optional[aiohttp.BasicAuth]:
        return None

    def _session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            headers=self._headers(),
            auth=self._auth(),
            timeout=aiohttp.ClientTimeout(total=self.request_timeout),
        )

    async def _request_json(
        self,
        session: aiohttp.ClientSession,
        url: str,
        params: Optional[dict[str, str]] = None,
    ) -> Any:
        """GET a JSON document, mapping every failure onto SourceUnavailable."""
        logger.debug(f"[{self.name}] GET {url} params={params}")
        try:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise SourceUnavailable(
                        self.id,
                        f"HTTP {response.status}: {error_text[:200]}",
                        status=response.status,
                    )
                return await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise SourceUnavailable(self.id, f"Request failed: {e}") from e
        except ValueError as e:
            # Body was not JSON
            raise SourceUnavailable(self.id, f"Malformed response: {e}") from e
