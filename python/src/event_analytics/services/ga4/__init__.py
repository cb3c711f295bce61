"""
GA4 (Google Analytics 4) service modules.

This package contains services for interacting with the GA4 Data API:
- credentials: Lazily built, process-wide authenticated client
- ga4_client: Aggregate and realtime event-count reports
- mock_service: Mock report client for local development
- exceptions: Configuration, request and upstream error types
"""

from .credentials import GA4CredentialProvider, ANALYTICS_SCOPE
from .ga4_client import (
    EventCount,
    GA4ReportClient,
    UNKNOWN_EVENT_NAME,
    parse_event_counts,
)
from .mock_service import GA4MockReportClient

__all__ = [
    "GA4CredentialProvider",
    "ANALYTICS_SCOPE",
    "EventCount",
    "GA4ReportClient",
    "UNKNOWN_EVENT_NAME",
    "parse_event_counts",
    "GA4MockReportClient",
]
