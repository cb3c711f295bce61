"""
Google Analytics 4 Data API report client.

Runs the two event-count reports served by the backend:
- Aggregate: event counts per event name over the trailing 7 days
- Realtime: event counts per event name over the trailing N minutes

Requests are built from normalized arguments and responses are shaped
into EventCount rows in the order GA4 returned them (descending count).
Upstream failures are raised as GA4APIError subclasses, never retried.
"""

import logging
import math
import time
from typing import List, Union

from google.analytics.data_v1beta.types import (
    DateRange,
    Dimension,
    Metric,
    MinuteRange,
    OrderBy,
    RunRealtimeReportRequest,
    RunRealtimeReportResponse,
    RunReportRequest,
    RunReportResponse,
)
from google.api_core import exceptions as core_exceptions
from google.auth.exceptions import GoogleAuthError
from pydantic import BaseModel, ConfigDict, Field

from ...monitoring.metrics import ga4_request_duration_seconds, ga4_requests_total
from .credentials import GA4CredentialProvider
from .exceptions import (
    GA4APIError,
    GA4AuthenticationError,
    GA4InvalidPropertyError,
    GA4InvalidRequestError,
    GA4QuotaExceededError,
    GA4RateLimitError,
)

logger = logging.getLogger(__name__)

UNKNOWN_EVENT_NAME = "unknown_event"

EVENT_NAME_DIMENSION = "eventName"
EVENT_COUNT_METRIC = "eventCount"
AGGREGATE_START_DATE = "7daysAgo"
AGGREGATE_END_DATE = "today"
MAX_MINUTE_RANGE = 2**31 - 1


class EventCount(BaseModel):
    """Number of times one event fired in the report window."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    event_name: str = Field(alias="eventName", min_length=1)
    count: int = Field(ge=0)


class GA4ReportClient:
    """
    Event-count reports against the GA4 Data API.

    Example:
        >>> provider = GA4CredentialProvider(credentials_path="/secrets/key.json")
        >>> client = GA4ReportClient(credential_provider=provider)
        >>> events = await client.fetch_aggregate("123456789")
        >>> events[0].event_name, events[0].count
        ('page_view', 42)
    """

    def __init__(self, credential_provider: GA4CredentialProvider):
        self.credential_provider = credential_provider

    async def fetch_aggregate(self, property_id: str) -> List[EventCount]:
        """
        Fetch event counts grouped by event name for the last seven days.

        Args:
            property_id: GA4 property ID (e.g., "513053895")

        Returns:
            Event counts, descending by count

        Raises:
            GA4InvalidRequestError: If property_id is empty
            GA4ConfigurationError: If credentials cannot be loaded
            GA4APIError: If the GA4 API call fails
        """
        _validate_property_id(property_id)

        request = RunReportRequest(
            property=f"properties/{property_id}",
            date_ranges=[
                DateRange(start_date=AGGREGATE_START_DATE, end_date=AGGREGATE_END_DATE)
            ],
            dimensions=[Dimension(name=EVENT_NAME_DIMENSION)],
            metrics=[Metric(name=EVENT_COUNT_METRIC)],
            order_bys=[_order_by_event_count()],
        )

        client = await self.credential_provider.get_client()

        logger.info(f"Running GA4 aggregate report: property={property_id}")
        response = await self._call("aggregate", property_id, client.run_report, request)

        events = parse_event_counts(response)
        logger.info(f"GA4 aggregate report completed: {len(events)} rows fetched")
        return events

    async def fetch_realtime(
        self,
        property_id: str,
        window_minutes: Union[int, float],
    ) -> List[EventCount]:
        """
        Fetch realtime event counts grouped by event name.

        The window is not capped here; callers clamp it to the platform limit.

        Args:
            property_id: GA4 property ID
            window_minutes: Trailing window in minutes (finite, > 0)

        Returns:
            Event counts, descending by count

        Raises:
            GA4InvalidRequestError: If property_id is empty or the window is not
                a finite positive number
            GA4ConfigurationError: If credentials cannot be loaded
            GA4APIError: If the GA4 API call fails
        """
        _validate_property_id(property_id)
        minutes = _validate_window_minutes(window_minutes)

        request = RunRealtimeReportRequest(
            property=f"properties/{property_id}",
            minute_ranges=[MinuteRange(start_minutes_ago=minutes, end_minutes_ago=0)],
            dimensions=[Dimension(name=EVENT_NAME_DIMENSION)],
            metrics=[Metric(name=EVENT_COUNT_METRIC)],
            order_bys=[_order_by_event_count()],
        )

        client = await self.credential_provider.get_client()

        logger.info(f"Running GA4 realtime report: property={property_id}, window={minutes}m")
        response = await self._call("realtime", property_id, client.run_realtime_report, request)

        events = parse_event_counts(response)
        logger.info(f"GA4 realtime report completed: {len(events)} rows fetched")
        return events

    async def _call(self, report: str, property_id: str, method, request):
        """Invoke one GA4 API method, recording metrics and mapping errors."""
        started = time.perf_counter()
        try:
            response = await method(request=request)
        except Exception as e:
            ga4_requests_total.labels(report=report, status="error").inc()
            raise _map_api_error(e, property_id) from e
        finally:
            ga4_request_duration_seconds.labels(report=report).observe(
                time.perf_counter() - started
            )

        ga4_requests_total.labels(report=report, status="success").inc()
        return response


def parse_event_counts(
    response: Union[RunReportResponse, RunRealtimeReportResponse]
) -> List[EventCount]:
    """
    Shape GA4 report rows into EventCount records.

    A row without an event name becomes "unknown_event"; a row without a
    usable count becomes 0. Row order is preserved.
    """
    events = []

    for row in response.rows:
        event_name = row.dimension_values[0].value if row.dimension_values else ""

        raw_count = row.metric_values[0].value if row.metric_values else ""
        count = _parse_count(raw_count)

        events.append(
            EventCount(event_name=event_name or UNKNOWN_EVENT_NAME, count=max(count, 0))
        )

    return events


def _parse_count(raw_count: str) -> int:
    """Parse a GA4 metric value; anything unusable counts as 0."""
    if not raw_count:
        return 0

    # Exact for integer strings of any size
    try:
        return int(raw_count)
    except ValueError:
        pass

    try:
        value = float(raw_count)
    except ValueError:
        value = math.nan

    if not math.isfinite(value):
        logger.warning(f"Unparseable GA4 eventCount value: {raw_count!r}")
        return 0

    return int(value)


def _order_by_event_count() -> OrderBy:
    return OrderBy(
        metric=OrderBy.MetricOrderBy(metric_name=EVENT_COUNT_METRIC),
        desc=True,
    )


def _validate_property_id(property_id: str) -> None:
    if not property_id or not str(property_id).strip():
        raise GA4InvalidRequestError("A GA4 property ID must be provided.")


def _validate_window_minutes(window_minutes: Union[int, float]) -> int:
    """Reject non-finite or non-positive windows; round to whole minutes."""
    if isinstance(window_minutes, bool) or not isinstance(window_minutes, (int, float)):
        raise GA4InvalidRequestError("Realtime window (minutes) must be a positive number.")

    # Integers skip the float checks; MinuteRange fields are int32
    if isinstance(window_minutes, int):
        if window_minutes <= 0:
            raise GA4InvalidRequestError("Realtime window (minutes) must be a positive number.")
        if window_minutes > MAX_MINUTE_RANGE:
            raise GA4InvalidRequestError(f"Realtime window (minutes) must not exceed {MAX_MINUTE_RANGE}.")
        return window_minutes

    if not math.isfinite(window_minutes) or window_minutes <= 0:
        raise GA4InvalidRequestError("Realtime window (minutes) must be a positive number.")
    if window_minutes > MAX_MINUTE_RANGE:
        raise GA4InvalidRequestError(f"Realtime window (minutes) must not exceed {MAX_MINUTE_RANGE}.")

    # Round half up; sub-minute windows still cover one minute
    return max(int(math.floor(window_minutes + 0.5)), 1)


def _map_api_error(error: Exception, property_id: str) -> GA4APIError:
    """Translate a google-api-core / google-auth failure into a GA4APIError."""
    message = str(error)

    # ResourceExhausted subclasses TooManyRequests
    if isinstance(error, core_exceptions.ResourceExhausted):
        logger.warning(f"GA4 quota exceeded: {error}")
        return GA4QuotaExceededError(message)

    if isinstance(error, core_exceptions.TooManyRequests):
        logger.warning(f"GA4 rate limit exceeded: {error}")
        return GA4RateLimitError(message)

    if isinstance(error, (core_exceptions.Unauthenticated, core_exceptions.PermissionDenied, GoogleAuthError)):
        logger.error(f"GA4 authentication error: {error}")
        return GA4AuthenticationError(message)

    if isinstance(error, core_exceptions.NotFound):
        logger.error(f"Invalid GA4 property: {error}")
        return GA4InvalidPropertyError(f"Invalid property ID: {property_id}")

    status_code = getattr(error, "code", None)
    logger.error(f"GA4 API error: {error}")
    return GA4APIError(
        f"GA4 API error: {error}",
        status_code=status_code if isinstance(status_code, int) else None,
    )
