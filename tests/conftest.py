"""
Pytest configuration and fixtures.

Provides shared fixtures for all tests including:
- Controllable clock for cache freshness
- Fake GA4 report client
- GA4 report responses built from (eventName, eventCount) pairs
"""

from typing import List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest

from google.analytics.data_v1beta.types import (
    DimensionValue,
    MetricValue,
    Row,
    RunRealtimeReportResponse,
    RunReportResponse,
)

from event_analytics.services.cache.report_cache import ReportCache
from event_analytics.services.ga4.ga4_client import EventCount


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def build_rows(pairs: List[Tuple[Optional[str], Optional[str]]]) -> List[Row]:
    """Build GA4 rows; None leaves the dimension or metric value out."""
    rows = []
    for event_name, event_count in pairs:
        rows.append(
            Row(
                dimension_values=[] if event_name is None else [DimensionValue(value=event_name)],
                metric_values=[] if event_count is None else [MetricValue(value=event_count)],
            )
        )
    return rows


@pytest.fixture
def clock():
    """Fake clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def report_cache(clock):
    """Report cache driven by the fake clock."""
    return ReportCache(clock=clock)


@pytest.fixture
def sample_events():
    """Event counts as returned for the page_view/click scenario."""
    return [
        EventCount(event_name="page_view", count=42),
        EventCount(event_name="click", count=7),
    ]


@pytest.fixture
def fake_report_client(sample_events):
    """Report client whose fetches return fresh copies of sample_events."""
    client = MagicMock()
    client.fetch_aggregate = AsyncMock(side_effect=lambda property_id: list(sample_events))
    client.fetch_realtime = AsyncMock(
        side_effect=lambda property_id, window_minutes: list(sample_events)
    )
    return client


@pytest.fixture
def make_report_response():
    """Factory for GA4 aggregate responses from (eventName, eventCount) pairs."""
    def _make(pairs):
        return RunReportResponse(rows=build_rows(pairs))
    return _make


@pytest.fixture
def report_response():
    """GA4 aggregate response with page_view=42 and click=7."""
    return RunReportResponse(rows=build_rows([("page_view", "42"), ("click", "7")]))


@pytest.fixture
def realtime_response():
    """GA4 realtime response with page_view=5 and scroll=2."""
    return RunRealtimeReportResponse(rows=build_rows([("page_view", "5"), ("scroll", "2")]))
