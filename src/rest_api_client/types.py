"""
Type definitions for rest_api_client.
"""
from dataclasses import dataclass, field
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Literal,
    Mapping,
    Optional,
    Tuple,
    Union,
)


# HTTP methods, always compared lower-cased
HttpMethod = Literal["get", "head", "delete", "options", "put", "post", "patch"]

# Methods whose first payload argument is routed to the request body
BODY_METHODS = ("put", "post", "patch")

# Request config is a plain mutable dict:
#   url, method, params, data, headers, auth, pagination_callback
#   plus transport options (timeout, follow_redirects, cookies, extensions)
RequestConfig = Dict[str, Any]

# Called with the request config; mutates it in place. May be async.
AuthCallback = Callable[[RequestConfig], Union[None, Awaitable[None]]]

# Called with the latest response body and the config that produced it.
# Returns the next request config, or None to stop. May be async.
PaginationCallback = Callable[
    [Any, RequestConfig],
    Union[Optional[RequestConfig], Awaitable[Optional[RequestConfig]]],
]


@dataclass(frozen=True)
class TokenCredentials:
    """Bearer token credentials."""

    token: str


@dataclass(frozen=True)
class BasicCredentials:
    """HTTP Basic credentials."""

    username: str
    password: str


@dataclass(frozen=True)
class HeaderCredentials:
    """Custom header credentials, copied verbatim onto each request."""

    headers: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, headers: Mapping[str, Any]) -> "HeaderCredentials":
        return cls(tuple((str(k), v) for k, v in headers.items()))


@dataclass(frozen=True)
class NoCredentials:
    """Anonymous requests."""


Credentials = Union[TokenCredentials, BasicCredentials, HeaderCredentials, NoCredentials]
