"""
AggregateCache - read-through, in-process cache for one catalog.

Provides:
- Staleness policy driven by an injected clock
- Concurrent fan-out to every source, each bounded by a timeout
- Per-source failure isolation
- Static fallback on a cold cache, stale-data retention on a warm one
- At most one refresh in flight at a time
"""

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .base import CatalogEntry, SourceFetcher, SourceStatus
from .dedup import deduplicate
from .errors import TotalSourceFailure
from .fallback import FALLBACK_VERSION, load_fallback

logger = logging.getLogger(__name__)

HOUR = 3600.0
DAY = 24 * HOUR
DEFAULT_FETCH_TIMEOUT = 15.0  # seconds per source

Clock = Callable[[], float]
FallbackLoader = Callable[[], list[CatalogEntry]]


def is_stale(now: float, last_updated: float, threshold: float) -> bool:
    """True once more than `threshold` seconds have passed since `last_updated`."""
    return now - last_updated > threshold


@dataclass(frozen=True)
class CacheState:
    """Immutable snapshot; refresh swaps the whole object."""

    entries: tuple[CatalogEntry, ...] = ()
    last_updated: float = 0.0  # gates staleness
    last_success: Optional[float] = None  # last live, non-empty refresh
    from_fallback: bool = False
    sources: tuple[SourceStatus, ...] = field(default_factory=tuple)


class AggregateCache:
    """
    Caches the merged output of several SourceFetchers for one catalog.

    The fetcher list is fixed at construction; its order is the order used for
    dedup (later fetchers win on id collisions).
    """

    def __init__(
        self,
        name: str,
        fetchers: Sequence[SourceFetcher],
        stale_threshold: float = DAY,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
        fallback: Optional[FallbackLoader] = None,
        clock: Clock = time.time,
        max_entries: Optional[int] = None,
    ):
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be None or >= 1, got {max_entries}")
        self.name = name
        self.fetchers: tuple[SourceFetcher, ...] = tuple(fetchers)
        self.stale_threshold = stale_threshold
        self.fetch_timeout = fetch_timeout
        self.max_entries = max_entries
        self._fallback = fallback or (lambda: load_fallback(name))
        self._clock = clock
        self._state = CacheState()
        self._inflight: Optional[asyncio.Future] = None

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def entries(self) -> list[CatalogEntry]:
        """Current entries without triggering a refresh."""
        return list(self._state.entries)

    @property
    def last_updated(self) -> datetime:
        return datetime.fromtimestamp(self._state.last_updated, tz=timezone.utc)

    @property
    def refreshing(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def needs_refresh(self, force_refresh: bool = False) -> bool:
        state = self._state
        return (
            force_refresh
            or not state.entries
            or is_stale(self._clock(), state.last_updated, self.stale_threshold)
        )

    async def get(self, force_refresh: bool = False) -> list[CatalogEntry]:
        """
        Return the current entry list, refreshing first when needed.

        Never raises for upstream failures. Only MalformedFallbackData can
        propagate.
        """
        if self.needs_refresh(force_refresh):
            await self._join_refresh()
        return list(self._state.entries)

    def status(self) -> dict:
        """Cache metadata for 'data as of ...' displays."""
        state = self._state
        return {
            "catalog": self.name,
            "count": len(state.entries),
            "lastUpdated": self.last_updated.isoformat(),
            "lastSuccess": (
                datetime.fromtimestamp(state.last_success, tz=timezone.utc).isoformat()
                if state.last_success is not None else None
            ),
            "isStale": is_stale(self._clock(), state.last_updated, self.stale_threshold),
            "fromFallback": state.from_fallback,
            "fallbackVersion": FALLBACK_VERSION if state.from_fallback else None,
            "refreshing": self.refreshing,
            "staleThresholdSeconds": self.stale_threshold,
            "sources": [s.to_status_dict() for s in state.sources],
        }

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def _join_refresh(self) -> None:
        """Start a refresh, or wait for the one already running."""
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._refresh())
        else:
            logger.debug(f"[{self.name}] Refresh already in flight, waiting for it")
        # Shield so a cancelled caller does not cancel the shared refresh
        await asyncio.shield(self._inflight)

    async def refresh(self) -> CacheState:
        """Force a refresh (joining one already in flight) and return the new state."""
        await self._join_refresh()
        return self._state

    async def _refresh(self) -> CacheState:
        """Fetch from every source and replace the cached state."""
        logger.info(f"[{self.name}] Refreshing from {len(self.fetchers)} sources...")
        started = self._clock()

        try:
            collected, statuses = await self._collect()
        except TotalSourceFailure as e:
            logger.error(f"[{self.name}] {e}")
            collected, statuses = [], list(e.sources)

        merged = deduplicate(collected)
        if self.max_entries is not None and len(merged) > self.max_entries:
            logger.info(f"[{self.name}] Trimming {len(merged)} entries to {self.max_entries}")
            merged = merged[: self.max_entries]

        now = self._clock()
        previous = self._state
        if merged:
            new_state = CacheState(
                entries=tuple(merged),
                last_updated=now,
                last_success=now,
                from_fallback=False,
                sources=tuple(statuses),
            )
            logger.info(
                f"[{self.name}] Refresh complete: {len(merged)} entries "
                f"({len(collected)} before dedup) in {now - started:.2f}s"
            )
        elif not previous.entries:
            fallback = self._fallback()
            new_state = CacheState(
                entries=tuple(fallback),
                last_updated=now,
                last_success=None,
                from_fallback=True,
                sources=tuple(statuses),
            )
            logger.warning(f"[{self.name}] No live entries, serving {len(fallback)} fallback entries")
        else:
            new_state = CacheState(
                entries=previous.entries,
                last_updated=now,
                last_success=previous.last_success,
                from_fallback=previous.from_fallback,
                sources=tuple(statuses),
            )
            logger.warning(
                f"[{self.name}] No live entries, retaining {len(previous.entries)} cached entries"
            )

        self._state = new_state
        return new_state

    async def _collect(self) -> tuple[list[CatalogEntry], list[SourceStatus]]:
        """
        Run every fetcher concurrently and concatenate results in fetcher order.

        Raises:
            TotalSourceFailure: if every fetcher failed
        """
        results = await asyncio.gather(
            *(self._fetch_one(fetcher) for fetcher in self.fetchers),
            return_exceptions=True,
        )

        collected: list[CatalogEntry] = []
        statuses: list[SourceStatus] = []
        errors: dict[str, str] = {}
        for fetcher, result in zip(self.fetchers, results):
            if isinstance(result, (KeyboardInterrupt, SystemExit)):
                raise result
            if isinstance(result, BaseException):
                message = str(result) or type(result).__name__
                logger.warning(f"[{self.name}] Source '{fetcher.id}' failed: {message}")
                errors[fetcher.id] = message
                statuses.append(SourceStatus(fetcher.id, fetcher.name, ok=False, error=message))
                continue
            entries, duration = result
            collected.extend(entries)
            statuses.append(
                SourceStatus(fetcher.id, fetcher.name, ok=True, count=len(entries), duration=duration)
            )

        if self.fetchers and len(errors) == len(self.fetchers):
            raise TotalSourceFailure(self.name, errors, sources=statuses)
        return collected, statuses

    async def _fetch_one(self, fetcher: SourceFetcher) -> tuple[list[CatalogEntry], float]:
        """Run one fetcher under the timeout; a timeout surfaces as an error."""
        started = time.monotonic()
        try:
            entries = await asyncio.wait_for(fetcher.fetch(), timeout=self.fetch_timeout)
        except asyncio.TimeoutError as e:
            raise TimeoutError(f"timed out after {self.fetch_timeout:g}s") from e
        duration = time.monotonic() - started
        logger.info(f"[{self.name}] Source '{fetcher.id}' returned {len(entries)} entries")
        return list(entries), duration
