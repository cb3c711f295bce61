"""
Analytics services.
"""

from .event_counts import (
    EventCountsService,
    RealtimeEventCounts,
    REALTIME_MAX_WINDOW_MINUTES,
    clamp_window_minutes,
    create_event_counts_service,
)

__all__ = [
    "EventCountsService",
    "RealtimeEventCounts",
    "REALTIME_MAX_WINDOW_MINUTES",
    "clamp_window_minutes",
    "create_event_counts_service",
]
