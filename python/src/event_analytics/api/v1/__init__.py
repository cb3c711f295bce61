"""
API v1 Routes
"""

from fastapi import APIRouter

from . import analytics

router = APIRouter()

router.include_router(analytics.router)
