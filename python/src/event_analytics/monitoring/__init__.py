"""
Monitoring and observability integrations.

Provides:
- Prometheus metrics for the GA4 report path
- Sentry error tracking
"""

from .metrics import (
    report_cache_requests_total,
    ga4_requests_total,
    ga4_request_duration_seconds,
)
from .sentry_config import init_sentry

__all__ = [
    "report_cache_requests_total",
    "ga4_requests_total",
    "ga4_request_duration_seconds",
    "init_sentry",
]
