"""
In-memory read-through cache for GA4 event-count reports.

Holds one entry for the 7-day aggregate report and one entry per realtime
window size. An entry is fresh while its age is strictly below the TTL of
its report class; a stale or missing entry is refreshed by awaiting the
caller's producer and replacing the entry wholesale.

Lifecycle: one ReportCache is built at startup and shared by all requests
through EventCountsService. Nothing else reads or writes its entries.

Usage:
    cache = ReportCache()
    events = await cache.read_aggregate_or_refresh(
        lambda: client.fetch_aggregate(property_id)
    )
"""

import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from ...monitoring.metrics import report_cache_requests_total
from ..ga4.ga4_client import EventCount

logger = logging.getLogger(__name__)

Producer = Callable[[], Awaitable[List[EventCount]]]


@dataclass(frozen=True)
class CacheEntry:
    """Report rows and the clock reading at which they were fetched."""

    fetched_at: float
    data: Tuple[EventCount, ...]

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.fetched_at < ttl


class ReportCache:
    """
    Time-bounded cache for aggregate and realtime event counts.

    Concurrent misses on the same key may each run their producer; the
    last one to finish wins the slot. A producer failure propagates and
    leaves the previous entry in place.
    """

    AGGREGATE_TTL_SECONDS = 60.0
    REALTIME_TTL_SECONDS = 15.0

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize report cache.

        Args:
            clock: Monotonic time source in seconds
        """
        self._clock = clock
        self._aggregate: Optional[CacheEntry] = None
        self._realtime: Dict[int, CacheEntry] = {}

    async def read_aggregate_or_refresh(self, producer: Producer) -> Tuple[EventCount, ...]:
        """
        Return cached aggregate counts, refreshing them when stale.

        Args:
            producer: Coroutine function performing the live fetch

        Returns:
            Event counts from cache or from the producer
        """
        now = self._clock()
        entry = self._aggregate

        if entry is not None and entry.is_fresh(now, self.AGGREGATE_TTL_SECONDS):
            report_cache_requests_total.labels(report="aggregate", result="hit").inc()
            logger.debug(f"Aggregate cache HIT (age: {now - entry.fetched_at:.1f}s)")
            return entry.data

        report_cache_requests_total.labels(report="aggregate", result="miss").inc()
        logger.debug("Aggregate cache MISS")

        data = tuple(await producer())
        self._aggregate = CacheEntry(fetched_at=now, data=data)
        return data

    async def read_realtime_or_refresh(
        self,
        window_key: int,
        producer: Producer,
    ) -> Tuple[EventCount, ...]:
        """
        Return cached realtime counts for one window size, refreshing when stale.

        Args:
            window_key: Clamped window size in minutes
            producer: Coroutine function performing the live fetch

        Returns:
            Event counts from cache or from the producer
        """
        now = self._clock()
        entry = self._realtime.get(window_key)

        if entry is not None and entry.is_fresh(now, self.REALTIME_TTL_SECONDS):
            report_cache_requests_total.labels(report="realtime", result="hit").inc()
            logger.debug(
                f"Realtime cache HIT: window={window_key}m "
                f"(age: {now - entry.fetched_at:.1f}s)"
            )
            return entry.data

        report_cache_requests_total.labels(report="realtime", result="miss").inc()
        logger.debug(f"Realtime cache MISS: window={window_key}m")

        data = tuple(await producer())
        self._realtime[window_key] = CacheEntry(fetched_at=now, data=data)
        return data
