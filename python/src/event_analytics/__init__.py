"""
GA4 event analytics backend.

Caches Google Analytics 4 event counts (7-day and realtime) behind a small
FastAPI service.
"""

__version__ = "0.1.0"
