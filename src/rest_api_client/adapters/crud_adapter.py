"""
CRUD adapter for rest_api_client.

Maps list/create/read/update/delete onto one resource path.
"""
from typing import Any, List, Mapping, Optional

from ..core.base_client import ApiClient
from ..types import RequestConfig


class EntityCrudApi:
    """CRUD operations on ``base_path`` through an ``ApiClient``."""

    def __init__(self, client: ApiClient, base_path: str):
        self._client = client
        self._base_path = base_path

    @property
    def base_path(self) -> str:
        return self._base_path

    def resolve_url_slug(self, id: Any = None) -> List[Any]:
        """Slugs for the collection, or for one entity when ``id`` is given."""
        if id is None:
            return [self._base_path]
        return [self._base_path, id]

    async def list(
        self,
        params: Optional[Mapping[str, Any]] = None,
        config: Optional[RequestConfig] = None,
    ) -> Any:
        """GET the collection."""
        return await self._client.get(self.resolve_url_slug(), params, config)

    async def create(
        self,
        data: Optional[Mapping[str, Any]] = None,
        config: Optional[RequestConfig] = None,
    ) -> Any:
        """POST a new entity to the collection."""
        return await self._client.post(self.resolve_url_slug(), data, config)

    async def read(
        self,
        id: Any,
        params: Optional[Mapping[str, Any]] = None,
        config: Optional[RequestConfig] = None,
    ) -> Any:
        """GET one entity."""
        return await self._client.get(self.resolve_url_slug(id), params, config)

    async def update(
        self,
        id: Any,
        data: Optional[Mapping[str, Any]] = None,
        config: Optional[RequestConfig] = None,
    ) -> Any:
        """PUT one entity."""
        return await self._client.put(self.resolve_url_slug(id), data, config)

    async def delete(
        self,
        id: Any,
        params: Optional[Mapping[str, Any]] = None,
        config: Optional[RequestConfig] = None,
    ) -> Any:
        """DELETE one entity."""
        return await self._client.delete(self.resolve_url_slug(id), params, config)
