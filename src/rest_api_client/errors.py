"""
Exceptions raised by rest_api_client.

Transport failures are not wrapped: httpx exceptions reach the caller as-is.
"""


class ApiClientError(Exception):
    """Base class for rest_api_client errors."""


class ConfigurationError(ApiClientError, ValueError):
    """Client configuration is invalid."""


class ClientClosedError(ApiClientError, RuntimeError):
    """Request attempted on a closed client."""

    def __init__(self, message: str = "Client has been closed"):
        super().__init__(message)
