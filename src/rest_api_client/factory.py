"""
Factory functions for creating API clients.
"""
from typing import Any, Optional

import httpx

from .adapters.crud_adapter import EntityCrudApi
from .config import ClientConfig
from .core.base_client import ApiClient


def create_api_client(
    base_url: Optional[str] = None,
    *,
    httpx_client: Optional[httpx.AsyncClient] = None,
    **options: Any,
) -> ApiClient:
    """
    Create an ApiClient.

    Keyword options are ``ClientConfig`` fields::

        client = create_api_client("https://api.example.com/v1", token="abc")
        client = create_api_client(hostname="api.example.com", base_path="/v1",
                                   username="u", password="p")
    """
    config = ClientConfig(base_url=base_url, **options)
    return ApiClient(config, httpx_client=httpx_client)


def create_crud_api(client: ApiClient, base_path: str) -> EntityCrudApi:
    """Create a CRUD facade for ``base_path`` on ``client``."""
    return EntityCrudApi(client, base_path)
