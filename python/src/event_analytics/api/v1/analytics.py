"""
Analytics API endpoints.

Provides:
- GET /analytics/events - Event counts for the last seven days
- GET /analytics/events/realtime?minutes=N - Event counts for the last N minutes (max 29)

Failures are logged with full detail and answered with a generic 500 body.
"""

import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ...services.analytics.event_counts import (
    EventCountsService,
    REALTIME_MAX_WINDOW_MINUTES,
)
from ...services.ga4.ga4_client import EventCount

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")

# Longer digit runs are out of range whatever their value
_MAX_SIGNIFICANT_DIGITS = 18


class EventCountsResponse(BaseModel):
    """Response model for the 7-day event counts."""

    events: List[EventCount]


class RealtimeEventCountsResponse(BaseModel):
    """Response model for realtime event counts."""

    model_config = ConfigDict(populate_by_name=True)

    window_minutes: int = Field(alias="windowMinutes")
    events: List[EventCount]


class ErrorResponse(BaseModel):
    """Error body returned on any failure."""

    error: str


def get_event_counts_service(request: Request) -> EventCountsService:
    """Process-wide service created during application startup."""
    return request.app.state.event_counts_service


def parse_minutes_param(raw: Optional[str]) -> Optional[int]:
    """
    Parse the leading integer of a query value ("15", "15min", " 7").

    Returns None when no integer can be read. Overlong digit runs are out
    of range either way and map to the maximum window without converting.
    """
    if raw is None:
        return None

    match = _LEADING_INTEGER.match(raw)
    if match is None:
        return None

    digits = match.group(1)
    if len(digits.lstrip("+-").lstrip("0")) > _MAX_SIGNIFICANT_DIGITS:
        return REALTIME_MAX_WINDOW_MINUTES

    return int(digits)


@router.get(
    "/events",
    response_model=EventCountsResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Event counts (last 7 days)",
    description="GA4 event counts grouped by event name over the last seven days, descending."
)
async def get_events(
    service: EventCountsService = Depends(get_event_counts_service),
):
    try:
        events = await service.get_event_counts()
    except Exception as e:
        logger.error(f"Failed to load analytics data: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Unable to load analytics data. Please check server logs."},
        )

    return EventCountsResponse(events=events)


@router.get(
    "/events/realtime",
    response_model=RealtimeEventCountsResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Realtime event counts",
    description=(
        "GA4 realtime event counts grouped by event name. "
        f"The window is clamped to 1-{REALTIME_MAX_WINDOW_MINUTES} minutes; "
        f"missing or invalid values use {REALTIME_MAX_WINDOW_MINUTES}."
    )
)
async def get_realtime_events(
    minutes: Optional[str] = Query(default=None, description="Trailing window in minutes"),
    service: EventCountsService = Depends(get_event_counts_service),
):
    requested_minutes = parse_minutes_param(minutes)

    try:
        result = await service.get_realtime_event_counts(requested_minutes)
    except Exception as e:
        logger.error(f"Failed to load realtime analytics data: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": (
                    "Unable to load realtime analytics data "
                    f"(limit {REALTIME_MAX_WINDOW_MINUTES} minutes). "
                    "Please check server logs."
                )
            },
        )

    return RealtimeEventCountsResponse(
        window_minutes=result.window_minutes,
        events=result.events,
    )
