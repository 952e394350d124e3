"""
httpx transport for rest_api_client.

Maps a request config onto ``httpx.AsyncClient.request`` and returns the
decoded response body. Transport errors are not caught here.
"""
import json
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from .console import print_request, print_response
from .core.form_data import FormData
from .types import RequestConfig

logger = logging.getLogger("rest_api_client.transport")

# Request config keys handled explicitly by build_request_kwargs
REQUEST_KEYS = {"url", "method", "params", "data", "headers", "auth", "pagination_callback"}

# Config keys forwarded to httpx unchanged
PASSTHROUGH_KEYS = ("timeout", "follow_redirects", "cookies", "extensions")

FORM_URLENCODED = "application/x-www-form-urlencoded"


def get_header(headers: Optional[Mapping[str, Any]], name: str) -> Optional[Any]:
    """Case-insensitive header lookup."""
    if not headers:
        return None
    name = name.lower()
    for key, value in headers.items():
        if str(key).lower() == name:
            return value
    return None


def _httpx_auth(auth: Any) -> Any:
    if auth is None or isinstance(auth, (httpx.Auth, tuple)):
        return auth
    if isinstance(auth, Mapping):
        return httpx.BasicAuth(auth.get("username", ""), auth.get("password", ""))
    return auth


def build_request_kwargs(config: RequestConfig) -> Dict[str, Any]:
    """Translate a request config into ``httpx.AsyncClient.request`` kwargs."""
    headers = {str(k): str(v) for k, v in (config.get("headers") or {}).items()}
    kwargs: Dict[str, Any] = {
        "method": str(config.get("method", "get")).upper(),
        "url": config["url"],
        "headers": headers,
    }

    if config.get("params") is not None:
        kwargs["params"] = config["params"]

    auth = _httpx_auth(config.get("auth"))
    if auth is not None:
        kwargs["auth"] = auth

    data = config.get("data")
    if isinstance(data, FormData):
        kwargs["content"] = data.encode()
    elif isinstance(data, (str, bytes)):
        kwargs["content"] = data
    elif data is not None:
        content_type = str(get_header(headers, "content-type") or "").lower()
        if isinstance(data, Mapping) and content_type.startswith(FORM_URLENCODED):
            kwargs["data"] = dict(data)
        else:
            kwargs["json"] = data

    for key in PASSTHROUGH_KEYS:
        if key in config:
            kwargs[key] = config[key]

    ignored = set(config) - REQUEST_KEYS - set(PASSTHROUGH_KEYS)
    if ignored:
        logger.debug(f"build_request_kwargs: ignoring unsupported config keys {sorted(ignored)}")

    return kwargs


def decode_body(response: httpx.Response) -> Any:
    """JSON body if it parses, otherwise text; None for an empty body."""
    if not response.content:
        return None
    text = response.text
    try:
        return json.loads(text)
    except ValueError:
        return text


class HttpxTransport:
    """Sends request configs through an ``httpx.AsyncClient``."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        raise_for_status: bool = True,
        debug: bool = False,
    ):
        self._client = client
        self._raise_for_status = raise_for_status
        self._debug = debug

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, config: RequestConfig) -> Any:
        """Send one request and return the decoded response body."""
        kwargs = build_request_kwargs(config)
        logger.debug(f"HttpxTransport.send: {kwargs['method']} {kwargs['url']}")
        if self._debug:
            print_request(kwargs["method"], kwargs["url"], kwargs["headers"], config.get("data"))

        response = await self._client.request(**kwargs)
        body = decode_body(response)

        logger.debug(f"HttpxTransport.send: {kwargs['url']} -> {response.status_code}")
        if self._debug:
            print_response(response.status_code, response.reason_phrase or "", kwargs["url"], body)

        if self._raise_for_status:
            response.raise_for_status()
        return body

    async def close(self) -> None:
        await self._client.aclose()
