"""
Auth handler utilities for rest_api_client.
"""
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from ..console import mask_sensitive
from ..types import (
    AuthCallback,
    BasicCredentials,
    Credentials,
    HeaderCredentials,
    RequestConfig,
    TokenCredentials,
)

logger = logging.getLogger(__name__)
LOG_PREFIX = "[AUTH]"


def _headers(config: RequestConfig) -> dict:
    headers = config.get("headers")
    if headers is None:
        headers = {}
    elif not isinstance(headers, dict):
        headers = dict(headers)
    config["headers"] = headers
    return headers


class AuthHandler(ABC):
    """Auth handler interface.

    ``apply`` mutates the request config in place and returns it.
    """

    @abstractmethod
    async def apply(self, config: Optional[RequestConfig]) -> RequestConfig:
        """Add credentials to the request config."""
        ...


class NoAuthHandler(AuthHandler):
    """Leaves requests anonymous."""

    async def apply(self, config: Optional[RequestConfig]) -> RequestConfig:
        return {} if config is None else config


class BearerAuthHandler(AuthHandler):
    """Bearer token auth handler."""

    def __init__(self, token: str):
        self._token = token

    async def apply(self, config: Optional[RequestConfig]) -> RequestConfig:
        if config is None:
            config = {}
        _headers(config)["Authorization"] = f"Bearer {self._token}"
        logger.debug(f"{LOG_PREFIX} BearerAuthHandler.apply: token={mask_sensitive(self._token)}")
        return config


class BasicAuthHandler(AuthHandler):
    """HTTP Basic auth handler; the transport encodes ``config["auth"]``."""

    def __init__(self, username: str, password: str):
        self._username = username
        self._password = password

    async def apply(self, config: Optional[RequestConfig]) -> RequestConfig:
        if config is None:
            config = {}
        config["auth"] = {"username": self._username, "password": self._password}
        logger.debug(
            f"{LOG_PREFIX} BasicAuthHandler.apply: username={self._username}, "
            f"password={mask_sensitive(self._password)}"
        )
        return config


class HeaderAuthHandler(AuthHandler):
    """Custom header auth handler."""

    def __init__(self, headers: Mapping[str, str]):
        self._headers = dict(headers)

    async def apply(self, config: Optional[RequestConfig]) -> RequestConfig:
        if config is None:
            config = {}
        headers = _headers(config)
        for name, value in self._headers.items():
            headers[name] = value
        logger.debug(f"{LOG_PREFIX} HeaderAuthHandler.apply: headers={sorted(self._headers)}")
        return config


class CallbackAuthHandler(AuthHandler):
    """Delegates to a caller-supplied callback, sync or async."""

    def __init__(self, callback: AuthCallback):
        self._callback = callback

    async def apply(self, config: Optional[RequestConfig]) -> RequestConfig:
        if config is None:
            config = {}
        result = self._callback(config)
        if inspect.isawaitable(result):
            await result
        logger.debug(f"{LOG_PREFIX} CallbackAuthHandler.apply: callback={getattr(self._callback, '__name__', self._callback)}")
        return config


def create_auth_handler(
    credentials: Optional[Credentials],
    auth_callback: Optional[AuthCallback] = None,
) -> AuthHandler:
    """Create auth handler; a callback takes precedence over credentials."""
    if auth_callback is not None:
        logger.debug(f"{LOG_PREFIX} create_auth_handler: callback")
        return CallbackAuthHandler(auth_callback)

    if isinstance(credentials, TokenCredentials):
        logger.debug(f"{LOG_PREFIX} create_auth_handler: bearer token")
        return BearerAuthHandler(credentials.token)
    if isinstance(credentials, BasicCredentials):
        logger.debug(f"{LOG_PREFIX} create_auth_handler: basic")
        return BasicAuthHandler(credentials.username, credentials.password)
    if isinstance(credentials, HeaderCredentials):
        logger.debug(f"{LOG_PREFIX} create_auth_handler: custom headers")
        return HeaderAuthHandler(dict(credentials.headers))

    logger.debug(f"{LOG_PREFIX} create_auth_handler: no credentials, requests are anonymous")
    return NoAuthHandler()
