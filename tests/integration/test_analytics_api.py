"""
Integration tests for the analytics HTTP endpoints.

Runs the FastAPI app with a real EventCountsService and ReportCache over
a fake GA4 report client.
"""

import pytest
from fastapi.testclient import TestClient

from event_analytics import main
from event_analytics.api.v1.analytics import get_event_counts_service, parse_minutes_param
from event_analytics.core.config import Settings
from event_analytics.services.analytics.event_counts import EventCountsService
from event_analytics.services.ga4.exceptions import GA4APIError, GA4ConfigurationError


@pytest.fixture
def service(fake_report_client, report_cache):
    return EventCountsService(
        property_id="123",
        report_client=fake_report_client,
        cache=report_cache,
    )


@pytest.fixture
def client(service):
    main.app.dependency_overrides[get_event_counts_service] = lambda: service
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestEventsEndpoint:

    def test_returns_events(self, client):
        response = client.get("/analytics/events")

        assert response.status_code == 200
        assert response.json() == {
            "events": [
                {"eventName": "page_view", "count": 42},
                {"eventName": "click", "count": 7},
            ]
        }

    def test_second_request_served_from_cache(self, client, fake_report_client):
        client.get("/analytics/events")
        client.get("/analytics/events")

        fake_report_client.fetch_aggregate.assert_awaited_once_with("123")

    def test_empty_events(self, client, fake_report_client):
        fake_report_client.fetch_aggregate.side_effect = None
        fake_report_client.fetch_aggregate.return_value = []

        response = client.get("/analytics/events")

        assert response.status_code == 200
        assert response.json() == {"events": []}

    def test_upstream_failure_is_500(self, client, fake_report_client):
        fake_report_client.fetch_aggregate.side_effect = GA4APIError("GA4 API error: boom")

        response = client.get("/analytics/events")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Unable to load analytics data. Please check server logs."
        }

    def test_configuration_failure_is_500(self, client, fake_report_client):
        fake_report_client.fetch_aggregate.side_effect = GA4ConfigurationError("missing key")

        response = client.get("/analytics/events")

        assert response.status_code == 500
        assert "error" in response.json()


class TestRealtimeEndpoint:

    @pytest.mark.parametrize(
        "query, expected_window",
        [
            ("", 29),
            ("?minutes=10", 10),
            ("?minutes=45", 29),
            ("?minutes=0", 29),
            ("?minutes=-3", 29),
            ("?minutes=abc", 29),
            ("?minutes=15min", 15),
            ("?minutes=1" + "0" * 400, 29),
            ("?minutes=" + "9" * 5000, 29),
        ],
    )
    def test_window_clamping(self, client, fake_report_client, query, expected_window):
        response = client.get(f"/analytics/events/realtime{query}")

        assert response.status_code == 200
        body = response.json()
        assert body["windowMinutes"] == expected_window
        assert body["events"][0] == {"eventName": "page_view", "count": 42}
        fake_report_client.fetch_realtime.assert_awaited_once_with("123", expected_window)

    def test_upstream_failure_mentions_limit(self, client, fake_report_client):
        fake_report_client.fetch_realtime.side_effect = GA4APIError("quota")

        response = client.get("/analytics/events/realtime?minutes=5")

        assert response.status_code == 500
        assert "29 minutes" in response.json()["error"]


class TestParseMinutesParam:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, None),
            ("", None),
            ("abc", None),
            ("12", 12),
            (" 7", 7),
            ("15.9", 15),
            ("-4", -4),
            ("9" * 5000, 29),
            ("1" + "0" * 400, 29),
            ("0" * 30 + "5", 5),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_minutes_param(raw) == expected


class TestLifespan:

    def test_mock_mode_serves_generated_counts(self, monkeypatch):
        monkeypatch.setattr(main, "settings", Settings(_env_file=None, GA4_MOCK_MODE=True))

        with TestClient(main.app) as client:
            response = client.get("/analytics/events")

        assert response.status_code == 200
        events = response.json()["events"]
        assert events
        assert all(set(event) == {"eventName", "count"} for event in events)

    def test_metrics_endpoint(self):
        with TestClient(main.app) as client:
            response = client.get("/metrics/")

        assert response.status_code == 200
        assert "report_cache_requests_total" in response.text
