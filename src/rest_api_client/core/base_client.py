"""
Base REST API client using httpx.
"""
import inspect
import logging
from typing import Any, List, Optional, Union

import httpx

from ..auth.auth_handler import AuthHandler, create_auth_handler
from ..config import ClientConfig, ResolvedConfig, resolve_config
from ..errors import ClientClosedError
from ..transport import HttpxTransport, get_header
from ..types import RequestConfig
from .form_data import MULTIPART_FORM_DATA, FormData, serialize_to_form_data
from .request_builder import parse_args
from .url_builder import build_url

logger = logging.getLogger("rest_api_client.base_client")


def _content_type_key(headers: Any) -> Optional[str]:
    for key in headers or {}:
        if str(key).lower() == "content-type":
            return key
    return None


def prepare_multipart(config: RequestConfig) -> RequestConfig:
    """
    Serialize ``config["data"]`` to multipart form-data when the request
    declares ``Content-Type: multipart/form-data``.

    The declared content type is replaced by the payload's, which carries
    the boundary. Other headers are kept.
    """
    headers = config.get("headers")
    content_type = get_header(headers, "content-type")
    data = config.get("data")
    if content_type != MULTIPART_FORM_DATA or data is None:
        return config

    if not isinstance(data, FormData):
        data = serialize_to_form_data(data)
        config["data"] = data

    merged = dict(headers)
    key = _content_type_key(merged)
    if key is not None:
        del merged[key]
    merged.update(data.get_headers())
    config["headers"] = merged
    logger.debug(f"prepare_multipart: {len(data)} fields, boundary={data.boundary}")
    return config


class ApiClient:
    """
    Asynchronous REST API client.

    Every verb method takes URL slugs followed by optional config objects;
    see ``rest_api_client.core.request_builder`` for how they are read::

        client = ApiClient(ClientConfig(base_url="https://api.example.com/v1", token="..."))
        await client.get("widgets")                         # GET /v1/widgets
        await client.get("widgets", {"page": 2}, None)      # params
        await client.post("widgets", {"name": "a"}, None)   # body
        await client.get("widgets", {"pagination_callback": next_page})
    """

    def __init__(
        self,
        config: ClientConfig,
        httpx_client: Optional[httpx.AsyncClient] = None,
    ):
        self._config: ResolvedConfig = resolve_config(config)
        if httpx_client is None:
            timeout = self._config.timeout
            httpx_client = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    connect=timeout.connect,
                    read=timeout.read,
                    write=timeout.write,
                    pool=timeout.connect,
                ),
                verify=self._config.verify_ssl,
            )
        self._transport = HttpxTransport(
            httpx_client,
            raise_for_status=self._config.raise_for_status,
            debug=self._config.debug,
        )
        self._auth_handler: AuthHandler = create_auth_handler(
            self._config.credentials, self._config.auth_callback
        )
        self._closed = False

    @property
    def config(self) -> ResolvedConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def build_url(self, *url_slugs: Any) -> str:
        """Absolute URL for the given slugs."""
        return build_url(self._config.base_url, *url_slugs)

    async def authenticate(self, config: Optional[RequestConfig]) -> RequestConfig:
        """Add this client's credentials to a request config."""
        return await self._auth_handler.apply(config)

    async def parse_args(self, *args: Any, default_method: str) -> RequestConfig:
        return await parse_args(self._config.base_url, *args, default_method=default_method)

    async def request(self, *args: Any, method: str = "get") -> Union[Any, List[Any]]:
        """
        Send a request built from ``args`` and return the response body.

        With a ``pagination_callback`` in the config, the callback is called
        with each body and the config that produced it; every config it
        returns is sent in turn until it returns None. The bodies of all
        pages are returned as a list, first page first.
        """
        if self._closed:
            raise ClientClosedError()

        config = await self.parse_args(*args, default_method=method)
        await self._prepare(config)

        body = await self._transport.send(config)

        pagination_callback = config.get("pagination_callback")
        if pagination_callback is None:
            return body

        bodies = [body]
        next_config = await self._next_page(pagination_callback, body, config)
        while next_config is not None:
            logger.debug(f"request: fetching page {len(bodies) + 1} from {next_config.get('url')}")
            await self._prepare(next_config)
            body = await self._transport.send(next_config)
            bodies.append(body)
            next_config = await self._next_page(pagination_callback, body, next_config)

        logger.debug(f"request: pagination finished after {len(bodies)} pages")
        return bodies

    async def _prepare(self, config: RequestConfig) -> RequestConfig:
        # Same steps for the first request and every following page
        self._apply_default_headers(config)
        prepare_multipart(config)
        return await self.authenticate(config)

    def _apply_default_headers(self, config: RequestConfig) -> None:
        # Request headers win over client defaults, names compared case-insensitively
        if not self._config.headers:
            return
        headers = dict(config.get("headers") or {})
        present = {str(key).lower() for key in headers}
        for key, value in self._config.headers.items():
            if key.lower() not in present:
                headers[key] = value
        config["headers"] = headers

    @staticmethod
    async def _next_page(callback, body: Any, config: RequestConfig) -> Optional[RequestConfig]:
        next_config = callback(body, config)
        if inspect.isawaitable(next_config):
            next_config = await next_config
        return next_config

    async def get(self, *args: Any) -> Any:
        """GET request: ``(slugs..., [params], [config])``."""
        return await self.request(*args, method="get")

    async def head(self, *args: Any) -> Any:
        """HEAD request: ``(slugs..., [params], [config])``."""
        return await self.request(*args, method="head")

    async def delete(self, *args: Any) -> Any:
        """DELETE request: ``(slugs..., [params], [config])``."""
        return await self.request(*args, method="delete")

    async def options(self, *args: Any) -> Any:
        """OPTIONS request: ``(slugs..., [params], [config])``."""
        return await self.request(*args, method="options")

    async def put(self, *args: Any) -> Any:
        """PUT request: ``(slugs..., [data], [config])``."""
        return await self.request(*args, method="put")

    async def post(self, *args: Any) -> Any:
        """POST request: ``(slugs..., [data], [config])``."""
        return await self.request(*args, method="post")

    async def patch(self, *args: Any) -> Any:
        """PATCH request: ``(slugs..., [data], [config])``."""
        return await self.request(*args, method="patch")

    async def close(self) -> None:
        """Close the client."""
        self._closed = True
        await self._transport.close()

    async def __aenter__(self) -> "ApiClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()
