"""
Custom exception hierarchy for the GA4 event analytics service.

Three kinds of failure surface from the core:
- Configuration errors (missing credentials, missing property ID)
- Invalid requests (caller contract violations caught before any network call)
- Upstream fetch errors (anything the GA4 Data API call itself raised)

None of them are retried inside the core.
"""


class GA4BaseException(Exception):
    """Base exception for all GA4-related errors."""
    pass


class GA4ConfigurationError(GA4BaseException):
    """
    Raised when required configuration is missing or unusable.

    Fixed by redeploying with corrected configuration, never by retrying.
    """
    pass


class GA4InvalidRequestError(GA4BaseException, ValueError):
    """Raised when a report is requested with invalid parameters."""
    pass


class GA4APIError(GA4BaseException):
    """Raised when the GA4 API call fails."""

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class GA4RateLimitError(GA4APIError):
    """Raised when GA4 API rate limit is exceeded (429)."""

    def __init__(self, message: str = "GA4 API rate limit exceeded"):
        super().__init__(message, status_code=429)


class GA4QuotaExceededError(GA4APIError):
    """
    Raised when GA4 API token quota is exhausted.

    Cannot succeed until the quota window resets.
    """

    def __init__(self, message: str = "GA4 API quota exceeded"):
        super().__init__(message, status_code=429)


class GA4AuthenticationError(GA4APIError):
    """Raised when the service account is rejected by the API."""

    def __init__(self, message: str = "GA4 authentication failed"):
        super().__init__(message, status_code=401)


class GA4InvalidPropertyError(GA4APIError):
    """Raised when the property does not exist or is not readable."""

    def __init__(self, message: str = "GA4 property not found"):
        super().__init__(message, status_code=404)
