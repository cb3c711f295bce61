"""
Sentry Error Tracking Configuration

Captures unhandled errors and ERROR-level log records (including the
upstream failures logged by the analytics routes) when SENTRY_DSN is set.

Usage:
    from event_analytics.monitoring.sentry_config import init_sentry

    init_sentry(settings)
"""

import logging

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from ..core.config import Settings

logger = logging.getLogger(__name__)


def init_sentry(settings: Settings) -> bool:
    """
    Initialize Sentry error tracking.

    Should be called at application startup, before any request handling.

    Returns:
        True if Sentry was initialized, False if no DSN is configured
    """
    if not settings.SENTRY_DSN:
        logger.info("Sentry DSN not configured, skipping initialization")
        return False

    logging_integration = LoggingIntegration(
        level=logging.INFO,  # Breadcrumbs
        event_level=logging.ERROR  # Events
    )

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            StarletteIntegration(transaction_style="endpoint"),
            AsyncioIntegration(),
            logging_integration,
        ],
        before_send=before_send_filter,
        before_send_transaction=before_send_transaction_filter,
        attach_stacktrace=True,
        send_default_pii=False,
    )

    logger.info(
        f"Sentry initialized: environment={settings.ENVIRONMENT}, "
        f"traces_sample_rate={settings.SENTRY_TRACES_SAMPLE_RATE}"
    )
    return True


def before_send_filter(event, hint):
    """
    Drop events raised from health and metrics checks; tag the rest.

    Returns:
        Modified event or None to drop the event
    """
    if event.get('request'):
        url = event['request'].get('url', '')
        if '/health' in url or '/metrics' in url:
            return None

    event.setdefault('tags', {})
    event['tags']['source'] = 'ga4-event-analytics'

    return event


def before_send_transaction_filter(event, hint):
    """Drop health check and metrics scrape transactions."""
    transaction_name = event.get('transaction', '')
    if '/health' in transaction_name or '/metrics' in transaction_name:
        return None

    return event
