"""
Generic helper for building REST API client wrappers.

Builds URLs from path slugs, resolves awaitables nested in arguments,
authenticates requests, serializes multipart form-data and drives
pagination, on top of httpx.
"""
from .types import (
    HttpMethod,
    RequestConfig,
    AuthCallback,
    PaginationCallback,
    Credentials,
    TokenCredentials,
    BasicCredentials,
    HeaderCredentials,
    NoCredentials,
)
from .errors import (
    ApiClientError,
    ConfigurationError,
    ClientClosedError,
)
from .config import (
    ClientConfig,
    ResolvedConfig,
    TimeoutConfig,
    resolve_config,
)
from .core.base_client import ApiClient
from .core.form_data import FormData, serialize_to_form_data
from .core.resolver import deep_resolve
from .core.url_builder import build_url
from .adapters.crud_adapter import EntityCrudApi
from .auth.auth_handler import (
    AuthHandler,
    NoAuthHandler,
    BearerAuthHandler,
    BasicAuthHandler,
    HeaderAuthHandler,
    CallbackAuthHandler,
    create_auth_handler,
)
from .factory import create_api_client, create_crud_api

__all__ = [
    # Types
    "HttpMethod",
    "RequestConfig",
    "AuthCallback",
    "PaginationCallback",
    "Credentials",
    "TokenCredentials",
    "BasicCredentials",
    "HeaderCredentials",
    "NoCredentials",
    # Errors
    "ApiClientError",
    "ConfigurationError",
    "ClientClosedError",
    # Config
    "ClientConfig",
    "ResolvedConfig",
    "TimeoutConfig",
    "resolve_config",
    # Client
    "ApiClient",
    "EntityCrudApi",
    # Helpers
    "FormData",
    "serialize_to_form_data",
    "deep_resolve",
    "build_url",
    # Auth
    "AuthHandler",
    "NoAuthHandler",
    "BearerAuthHandler",
    "BasicAuthHandler",
    "HeaderAuthHandler",
    "CallbackAuthHandler",
    "create_auth_handler",
    # Factory
    "create_api_client",
    "create_crud_api",
]

__version__ = "0.1.0"
