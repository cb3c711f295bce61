"""
Mock GA4 report client for local development and testing.

Enabled with GA4_MOCK_MODE=true. Serves plausible event counts without
service account credentials or quota consumption, through the same
interface as GA4ReportClient.

Usage:
    client = GA4MockReportClient(seed=42)
    events = await client.fetch_aggregate("123456789")
"""

import logging
import random
from typing import List, Optional, Union

from .ga4_client import (
    EventCount,
    _validate_property_id,
    _validate_window_minutes,
)

logger = logging.getLogger(__name__)


class GA4MockReportClient:
    """
    Mock event-count reports.

    Daily volumes per event are fixed; each fetch applies a small random
    variation. Realtime counts are the daily volume scaled down to the
    requested window.
    """

    # Average events per day
    DAILY_EVENT_VOLUMES = {
        "page_view": 4200,
        "session_start": 1500,
        "user_engagement": 1350,
        "scroll": 980,
        "first_visit": 620,
        "click": 410,
        "form_submit": 75,
        "purchase": 18,
    }

    MINUTES_PER_DAY = 24 * 60

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize mock client.

        Args:
            seed: Random seed for reproducible counts
        """
        self._random = random.Random(seed)

        logger.info(f"GA4MockReportClient initialized: seed={seed}")

    async def fetch_aggregate(self, property_id: str) -> List[EventCount]:
        """Mock 7-day event counts, descending by count."""
        _validate_property_id(property_id)

        logger.debug(f"Mock GA4 aggregate report: property={property_id}")
        return self._generate(scale=7.0)

    async def fetch_realtime(
        self,
        property_id: str,
        window_minutes: Union[int, float],
    ) -> List[EventCount]:
        """Mock realtime event counts for the trailing window."""
        _validate_property_id(property_id)
        minutes = _validate_window_minutes(window_minutes)

        logger.debug(f"Mock GA4 realtime report: property={property_id}, window={minutes}m")
        return self._generate(scale=minutes / self.MINUTES_PER_DAY)

    def _generate(self, scale: float) -> List[EventCount]:
        events = []
        for event_name, daily_volume in self.DAILY_EVENT_VOLUMES.items():
            count = int(daily_volume * scale * self._random.uniform(0.8, 1.2))
            if count > 0:
                events.append(EventCount(event_name=event_name, count=count))

        # GA4 orders by eventCount descending; sorted() is stable for ties
        return sorted(events, key=lambda event: event.count, reverse=True)
