"""
Prometheus Metrics for GA4 report fetching and caching.

Exposes metrics for:
- Report cache hits and misses
- GA4 API calls by report type and outcome
- GA4 API call latency

Exported at the /metrics endpoint.
"""

from prometheus_client import Counter, Histogram


# ============================================================================
# Report Cache Metrics
# ============================================================================

report_cache_requests_total = Counter(
    'report_cache_requests_total',
    'Report cache lookups',
    ['report', 'result']  # report: 'aggregate' or 'realtime'; result: 'hit' or 'miss'
)


# ============================================================================
# GA4 API Metrics
# ============================================================================

ga4_requests_total = Counter(
    'ga4_requests_total',
    'Total number of GA4 Data API report calls',
    ['report', 'status']  # status: 'success' or 'error'
)

ga4_request_duration_seconds = Histogram(
    'ga4_request_duration_seconds',
    'GA4 Data API report call latency in seconds',
    ['report'],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)
)
