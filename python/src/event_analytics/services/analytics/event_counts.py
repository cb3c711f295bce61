"""
Event count aggregation service.

Public contract behind the analytics endpoints:
- get_event_counts(): 7-day event counts for the configured property
- get_realtime_event_counts(minutes): event counts over a trailing window
  of at most 29 minutes

Both read through ReportCache and fetch from GA4 only on a miss. Errors
from the credential provider or report client propagate unchanged.

Example:
    service = create_event_counts_service(settings)
    events = await service.get_event_counts()
    realtime = await service.get_realtime_event_counts(10)
"""

import logging
import math
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ...core.config import Settings
from ..cache.report_cache import ReportCache
from ..ga4.credentials import GA4CredentialProvider
from ..ga4.exceptions import GA4ConfigurationError
from ..ga4.ga4_client import EventCount, GA4ReportClient
from ..ga4.mock_service import GA4MockReportClient

logger = logging.getLogger(__name__)

# Standard GA4 properties expose at most 29 minutes of realtime data
REALTIME_MAX_WINDOW_MINUTES = 29


class RealtimeEventCounts(BaseModel):
    """Realtime event counts and the window they cover."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    window_minutes: int = Field(alias="windowMinutes", ge=1, le=REALTIME_MAX_WINDOW_MINUTES)
    events: Tuple[EventCount, ...]


def clamp_window_minutes(requested: Any) -> int:
    """
    Clamp a requested realtime window into [1, 29] minutes.

    Missing, non-numeric, non-finite and non-positive values fall back to
    the maximum window; larger values are capped at it. Fractional values
    round half up.

    Examples:
        >>> clamp_window_minutes(15)
        15
        >>> clamp_window_minutes(1000)
        29
        >>> clamp_window_minutes(None)
        29
    """
    if requested is None or isinstance(requested, bool):
        return REALTIME_MAX_WINDOW_MINUTES

    # Integers compare exactly; huge ones cannot be converted to float
    if isinstance(requested, int):
        if requested <= 0 or requested > REALTIME_MAX_WINDOW_MINUTES:
            return REALTIME_MAX_WINDOW_MINUTES
        return requested

    try:
        value = float(requested)
    except (TypeError, ValueError, OverflowError):
        return REALTIME_MAX_WINDOW_MINUTES

    if not math.isfinite(value) or value <= 0:
        return REALTIME_MAX_WINDOW_MINUTES

    rounded = int(math.floor(value + 0.5))
    return min(max(rounded, 1), REALTIME_MAX_WINDOW_MINUTES)


class EventCountsService:
    """
    Orchestrates cache lookups and GA4 fetches for event counts.

    One instance is created per process (see create_event_counts_service)
    so that the cache and credential handle are shared across requests.
    """

    def __init__(
        self,
        property_id: str,
        report_client: Union[GA4ReportClient, GA4MockReportClient],
        cache: Optional[ReportCache] = None,
    ):
        """
        Initialize event counts service.

        Args:
            property_id: GA4 property ID to report on
            report_client: Real or mock GA4 report client
            cache: Report cache (a fresh one is created if omitted)
        """
        self.property_id = property_id
        self.report_client = report_client
        self.cache = cache or ReportCache()

    def _require_property_id(self) -> str:
        if not self.property_id or not self.property_id.strip():
            raise GA4ConfigurationError(
                "Missing GA4_PROPERTY_ID; a GA4 property ID must be configured."
            )
        return self.property_id

    async def get_event_counts(self) -> Tuple[EventCount, ...]:
        """
        Event counts per event name over the last seven days.

        Raises:
            GA4ConfigurationError: If property ID or credentials are missing
            GA4APIError: If the GA4 API call fails
        """
        property_id = self._require_property_id()

        return await self.cache.read_aggregate_or_refresh(
            lambda: self.report_client.fetch_aggregate(property_id)
        )

    async def get_realtime_event_counts(
        self,
        requested_minutes: Any = None,
    ) -> RealtimeEventCounts:
        """
        Event counts per event name over the trailing realtime window.

        Args:
            requested_minutes: Requested window; clamped into [1, 29]

        Raises:
            GA4ConfigurationError: If property ID or credentials are missing
            GA4APIError: If the GA4 API call fails
        """
        property_id = self._require_property_id()
        window_minutes = clamp_window_minutes(requested_minutes)

        if window_minutes != requested_minutes:
            logger.debug(
                f"Realtime window {requested_minutes!r} clamped to {window_minutes} minutes"
            )

        events = await self.cache.read_realtime_or_refresh(
            window_minutes,
            lambda: self.report_client.fetch_realtime(property_id, window_minutes),
        )
        return RealtimeEventCounts(window_minutes=window_minutes, events=events)


def create_event_counts_service(settings: Settings) -> EventCountsService:
    """
    Build the process-wide event counts service from settings.

    Credentials are not touched here; they load on the first GA4 call.
    """
    if settings.GA4_MOCK_MODE:
        logger.warning("GA4_MOCK_MODE enabled: serving generated event counts")
        report_client = GA4MockReportClient()
    else:
        provider = GA4CredentialProvider(
            credentials_path=settings.GOOGLE_APPLICATION_CREDENTIALS
        )
        report_client = GA4ReportClient(credential_provider=provider)

    logger.info(f"Event counts service ready: property={settings.GA4_PROPERTY_ID}")

    return EventCountsService(
        property_id=settings.GA4_PROPERTY_ID,
        report_client=report_client,
        cache=ReportCache(),
    )
