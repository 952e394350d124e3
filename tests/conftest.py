"""
Shared fixtures for rest_api_client tests.
"""
import httpx
import pytest

from rest_api_client.config import ClientConfig
from rest_api_client.core.base_client import ApiClient


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays bodies."""

    def __init__(self, bodies=None, status_code=200):
        self.requests = []
        self._bodies = list(bodies or [])
        self._status_code = status_code

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        body = self._bodies.pop(0) if self._bodies else {"ok": True}
        if isinstance(body, httpx.Response):
            return body
        if isinstance(body, str):
            return httpx.Response(self._status_code, text=body)
        return httpx.Response(self._status_code, json=body)


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def make_client():
    """Build an ApiClient whose httpx client is backed by a MockTransport."""

    def _make(handler, **options):
        options.setdefault("base_url", "https://api.example.com/v1/")
        httpx_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ApiClient(ClientConfig(**options), httpx_client=httpx_client)

    return _make
