"""
FastAPI application entry point.

Serves GA4 event counts to the analytics dashboard:
- GET /analytics/events - 7-day event counts
- GET /analytics/events/realtime - realtime event counts (max 29 minutes)
- GET /health - liveness check
- GET /metrics - Prometheus metrics
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from .api.v1 import router as api_v1_router
from .core.config import settings
from .monitoring.sentry_config import init_sentry
from .services.analytics.event_counts import create_event_counts_service

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

init_sentry(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    Builds the event counts service (cache + GA4 client) once per process.
    GA4 credentials load lazily on the first report request.
    """
    logger.info("Starting GA4 Event Analytics API...")

    app.state.event_counts_service = create_event_counts_service(settings)

    logger.info(f"Analytics server running at http://localhost:{settings.PORT}")

    yield

    logger.info("GA4 Event Analytics API shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="GA4 Event Analytics API",
    description="Cached Google Analytics 4 event counts for the analytics dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Mount Prometheus metrics endpoint
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)


@app.get("/health")
async def health_check():
    """Liveness check."""
    return {"status": "ok"}


app.include_router(api_v1_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "event_analytics.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
