"""
Resource adapters for rest_api_client.
"""
from .crud_adapter import EntityCrudApi

__all__ = [
    "EntityCrudApi",
]
