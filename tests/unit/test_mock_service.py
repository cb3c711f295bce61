"""
Unit tests for the mock GA4 report client.
"""

import pytest

from event_analytics.services.ga4.exceptions import GA4InvalidRequestError
from event_analytics.services.ga4.mock_service import GA4MockReportClient


@pytest.mark.asyncio
async def test_aggregate_sorted_descending():
    client = GA4MockReportClient(seed=7)

    events = await client.fetch_aggregate("123")

    counts = [e.count for e in events]
    assert counts == sorted(counts, reverse=True)
    assert {e.event_name for e in events} <= set(GA4MockReportClient.DAILY_EVENT_VOLUMES)


@pytest.mark.asyncio
async def test_seed_is_reproducible():
    first = await GA4MockReportClient(seed=42).fetch_aggregate("123")
    second = await GA4MockReportClient(seed=42).fetch_aggregate("123")

    assert first == second


@pytest.mark.asyncio
async def test_realtime_smaller_than_aggregate():
    client = GA4MockReportClient(seed=1)

    aggregate = await client.fetch_aggregate("123")
    realtime = await client.fetch_realtime("123", 29)

    assert sum(e.count for e in realtime) < sum(e.count for e in aggregate)


@pytest.mark.asyncio
async def test_validates_like_real_client():
    client = GA4MockReportClient()

    with pytest.raises(GA4InvalidRequestError):
        await client.fetch_aggregate("")
    with pytest.raises(GA4InvalidRequestError):
        await client.fetch_realtime("123", 0)
