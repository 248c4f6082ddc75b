"""Adapters to external systems: Redis storage and the storefront API."""

from .api_client import StorefrontApiClient, TokenStore
from .redis_storage import RedisStorage

__all__ = ["RedisStorage", "StorefrontApiClient", "TokenStore"]
