"""
Configuration for rest_api_client.
"""
import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlparse

from .console import mask_sensitive
from .errors import ConfigurationError
from .types import (
    AuthCallback,
    BasicCredentials,
    Credentials,
    HeaderCredentials,
    NoCredentials,
    TokenCredentials,
)

logger = logging.getLogger("rest_api_client.config")

DEFAULT_PORT = 443
DEFAULT_PROTOCOL = "https"
DEFAULT_BASE_PATH = "/"
SUPPORTED_PROTOCOLS = ("http", "https")


def _env_flag(name: str) -> Optional[str]:
    value = os.environ.get(name)
    return value.strip() if value is not None else None


def is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    return _env_flag("NODE_TLS_REJECT_UNAUTHORIZED") == "0" or _env_flag("SSL_CERT_VERIFY") == "0"


def is_debug_enabled_by_env() -> bool:
    """True when REST_API_CLIENT_DEBUG is set to 1/true/yes."""
    return (_env_flag("REST_API_CLIENT_DEBUG") or "").lower() in ("1", "true", "yes")


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


DEFAULT_TIMEOUT = TimeoutConfig()


@dataclass
class ClientConfig:
    """Client configuration.

    Either ``base_url`` or ``hostname`` (with optional ``port``, ``protocol``
    and ``base_path``) locates the API.

    Credentials, first match wins:
    - token: ``Authorization: Bearer <token>``
    - username + password: HTTP Basic
    - auth_headers: headers copied onto every request
    - credentials: a Credentials variant, or a mapping with one of the
      keys above

    ``auth_callback`` overrides all of them: it receives the request config
    and is solely responsible for authenticating it.
    """

    base_url: Optional[str] = None
    hostname: Optional[str] = None
    port: Optional[Union[int, str]] = None
    protocol: Optional[str] = None
    base_path: Optional[str] = None
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    auth_headers: Optional[Mapping[str, str]] = None
    credentials: Optional[Union[Credentials, Mapping[str, Any]]] = None
    auth_callback: Optional[AuthCallback] = None
    timeout: Union[TimeoutConfig, float, None] = None
    headers: Dict[str, str] = field(default_factory=dict)
    verify_ssl: Optional[bool] = None
    raise_for_status: bool = True
    debug: Optional[bool] = None

    def __repr__(self) -> str:
        """Safe repr that masks sensitive values."""
        return (
            f"ClientConfig(base_url={self.base_url!r}, hostname={self.hostname!r}, "
            f"port={self.port!r}, protocol={self.protocol!r}, base_path={self.base_path!r}, "
            f"token={mask_sensitive(self.token)!r}, username={self.username!r}, "
            f"password={mask_sensitive(self.password)!r}, "
            f"auth_headers={sorted(self.auth_headers) if self.auth_headers else None!r}, "
            f"has_callback={self.auth_callback is not None})"
        )


@dataclass(frozen=True)
class ResolvedConfig:
    """Resolved, immutable client configuration with defaults applied."""

    hostname: str
    port: Optional[str]
    protocol: str
    base_path: str
    credentials: Credentials
    auth_callback: Optional[AuthCallback]
    timeout: TimeoutConfig
    headers: Mapping[str, str]
    verify_ssl: bool
    raise_for_status: bool
    debug: bool

    @property
    def origin(self) -> str:
        port = f":{self.port}" if self.port else ""
        return f"{self.protocol}://{self.hostname}{port}"

    @property
    def base_url(self) -> str:
        return self.origin + self.base_path

    def __repr__(self) -> str:
        return (
            f"ResolvedConfig(base_url={self.base_url!r}, "
            f"credentials={type(self.credentials).__name__}, "
            f"has_callback={self.auth_callback is not None})"
        )


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def normalize_protocol(protocol: Optional[str]) -> str:
    """Accept ``https``, ``https:`` or ``HTTPS``; return ``https``."""
    if not protocol:
        return DEFAULT_PROTOCOL
    protocol = protocol.strip().lower().rstrip(":")
    if protocol not in SUPPORTED_PROTOCOLS:
        raise ConfigurationError(f"Unsupported protocol: {protocol!r}")
    return protocol


def normalize_base_path(base_path: Optional[str]) -> str:
    if not base_path:
        return DEFAULT_BASE_PATH
    if not base_path.startswith("/"):
        base_path = "/" + base_path
    return base_path


def coerce_credentials(credentials: Union[Credentials, Mapping[str, Any], None]) -> Credentials:
    """Turn a credentials mapping into the matching Credentials variant."""
    if credentials is None:
        return NoCredentials()
    if isinstance(credentials, (TokenCredentials, BasicCredentials, HeaderCredentials, NoCredentials)):
        return credentials
    if not isinstance(credentials, Mapping):
        raise ConfigurationError(f"Unsupported credentials type: {type(credentials).__name__}")

    if credentials.get("token") is not None:
        return TokenCredentials(credentials["token"])
    if credentials.get("username") is not None and credentials.get("password") is not None:
        return BasicCredentials(credentials["username"], credentials["password"])
    if credentials.get("auth_headers") is not None:
        return HeaderCredentials.from_mapping(credentials["auth_headers"])
    return NoCredentials()


def select_credentials(config: ClientConfig) -> Credentials:
    """Pick the credential variant by precedence."""
    if config.token is not None:
        return TokenCredentials(config.token)
    if config.username is not None and config.password is not None:
        return BasicCredentials(config.username, config.password)
    if config.username is not None or config.password is not None:
        logger.warning("select_credentials: username and password must both be set; ignoring them")
    if config.auth_headers is not None:
        return HeaderCredentials.from_mapping(config.auth_headers)
    return coerce_credentials(config.credentials)


def _split_base_url(base_url: str):
    try:
        parsed = urlparse(base_url)
        port = parsed.port
    except ValueError as e:
        raise ConfigurationError(f"Invalid base_url: {base_url}") from e
    if not parsed.scheme or not parsed.hostname:
        raise ConfigurationError(f"Invalid base_url: {base_url}")
    return (
        parsed.hostname,
        str(port) if port is not None else None,
        normalize_protocol(parsed.scheme),
        normalize_base_path(parsed.path),
    )


def resolve_config(config: ClientConfig) -> ResolvedConfig:
    """Validate client configuration and apply defaults."""
    if config.base_url:
        hostname, port, protocol, base_path = _split_base_url(config.base_url)
    else:
        if not config.hostname:
            raise ConfigurationError("base_url or hostname is required")
        hostname = config.hostname
        port = str(config.port if config.port is not None else DEFAULT_PORT)
        protocol = normalize_protocol(config.protocol)
        base_path = normalize_base_path(config.base_path)

    verify_ssl = config.verify_ssl
    if verify_ssl is None:
        verify_ssl = not is_ssl_verify_disabled_by_env()

    debug = config.debug
    if debug is None:
        debug = is_debug_enabled_by_env()

    resolved = ResolvedConfig(
        hostname=hostname,
        port=port,
        protocol=protocol,
        base_path=base_path,
        credentials=select_credentials(config),
        auth_callback=config.auth_callback,
        timeout=normalize_timeout(config.timeout),
        headers=MappingProxyType(dict(config.headers)),
        verify_ssl=verify_ssl,
        raise_for_status=config.raise_for_status,
        debug=debug,
    )
    logger.debug(f"resolve_config: {resolved!r}")
    return resolved
