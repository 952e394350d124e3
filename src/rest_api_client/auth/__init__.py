"""
Auth handlers for rest_api_client.
"""
from .auth_handler import (
    AuthHandler,
    NoAuthHandler,
    BearerAuthHandler,
    BasicAuthHandler,
    HeaderAuthHandler,
    CallbackAuthHandler,
    create_auth_handler,
)

__all__ = [
    "AuthHandler",
    "NoAuthHandler",
    "BearerAuthHandler",
    "BasicAuthHandler",
    "HeaderAuthHandler",
    "CallbackAuthHandler",
    "create_auth_handler",
]
