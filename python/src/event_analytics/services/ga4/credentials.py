"""
Service account credential provider for the GA4 Data API.

Builds one authenticated BetaAnalyticsDataAsyncClient per process from the
service account key file referenced by GOOGLE_APPLICATION_CREDENTIALS.

Example:
    provider = GA4CredentialProvider(credentials_path="/secrets/ga-key.json")
    client = await provider.get_client()
"""

import asyncio
import logging
from typing import Optional

from google.analytics.data_v1beta import BetaAnalyticsDataAsyncClient
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account

from .exceptions import GA4ConfigurationError

logger = logging.getLogger(__name__)

ANALYTICS_SCOPE = "https://www.googleapis.com/auth/analytics.readonly"


class GA4CredentialProvider:
    """
    Lazily constructed, process-wide GA4 client handle.

    The first call to get_client() builds the client; every later call
    (including callers that arrive while construction is in progress) gets
    the same instance. A failed construction is remembered and re-raised
    to all later callers until the process is restarted.
    """

    def __init__(self, credentials_path: Optional[str]):
        """
        Initialize credential provider.

        Args:
            credentials_path: Path to the service account JSON key file
        """
        self.credentials_path = credentials_path

        self._client: Optional[BetaAnalyticsDataAsyncClient] = None
        self._error: Optional[GA4ConfigurationError] = None
        self._lock = asyncio.Lock()

    async def get_client(self) -> BetaAnalyticsDataAsyncClient:
        """
        Return the authenticated GA4 Data API client.

        Raises:
            GA4ConfigurationError: If the key file path is missing or unusable
        """
        if self._client is not None:
            return self._client

        async with self._lock:
            if self._client is None and self._error is None:
                try:
                    self._client = await self._create_client()
                except GA4ConfigurationError as e:
                    self._error = e

            if self._error is not None:
                raise self._error

            return self._client

    async def _create_client(self) -> BetaAnalyticsDataAsyncClient:
        if not self.credentials_path or not self.credentials_path.strip():
            raise GA4ConfigurationError(
                "Missing GOOGLE_APPLICATION_CREDENTIALS environment variable "
                "pointing to the service account JSON key."
            )

        logger.info(f"Loading GA4 service account credentials from {self.credentials_path}")

        # Key file is read off the event loop
        try:
            credentials = await asyncio.to_thread(
                service_account.Credentials.from_service_account_file,
                self.credentials_path,
                scopes=[ANALYTICS_SCOPE],
            )
        except (OSError, ValueError, GoogleAuthError) as e:
            logger.error(f"Failed to load GA4 service account credentials: {e}")
            raise GA4ConfigurationError(
                f"Unable to load service account key from {self.credentials_path}: {e}"
            ) from e

        client = BetaAnalyticsDataAsyncClient(credentials=credentials)
        logger.info("GA4 Data API client initialized")
        return client
