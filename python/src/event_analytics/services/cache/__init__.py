"""
Report caching services.
"""

from .report_cache import CacheEntry, ReportCache

__all__ = [
    "CacheEntry",
    "ReportCache",
]
