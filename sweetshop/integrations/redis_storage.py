"""Redis-backed durable storage with in-memory fallback."""
from __future__ import annotations

import logging
from typing import Any

import redis

from sweetshop.core.constants import DEFAULT_STORAGE_PREFIX
from sweetshop.core.storage import MemoryStorage

logger = logging.getLogger(__name__)


class RedisStorage:
    """Key-value storage persisted in Redis under a per-client prefix.

    When Redis cannot be reached at start-up, or any later call fails, the
    storage logs a warning and keeps working from memory for the rest of
    its lifetime. Callers never see a Redis error.
    """

    SOCKET_TIMEOUT_SECONDS = 5

    def __init__(
        self,
        redis_url: str | None = None,
        prefix: str = DEFAULT_STORAGE_PREFIX,
        client: Any = None,
    ):
        self._redis_url = redis_url
        self._prefix = prefix
        self._memory = MemoryStorage()
        self._client = client if client is not None else self._init_client()

    @property
    def is_redis(self) -> bool:
        return self._client is not None

    def _init_client(self):
        if not self._redis_url:
            logger.warning("REDIS_URL is not set; storage uses in-memory fallback")
            return None

        try:
            client = redis.from_url(
                self._redis_url,
                decode_responses=True,
                socket_connect_timeout=self.SOCKET_TIMEOUT_SECONDS,
                socket_timeout=self.SOCKET_TIMEOUT_SECONDS,
            )
            client.ping()
            logger.info("Redis storage enabled")
            return client
        except Exception as exc:
            logger.warning("Redis storage init failed, fallback to in-memory: %s", exc)
            return None

    def _switch_to_memory_fallback(self, reason: Exception | str) -> None:
        logger.warning("Redis storage fallback to memory mode: %s", reason)
        self._client = None

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> str | None:
        if self._client:
            try:
                value = self._client.get(self._key(key))
            except Exception as exc:
                self._switch_to_memory_fallback(exc)
            else:
                if isinstance(value, bytes):
                    value = value.decode("utf-8")
                return value
        return self._memory.get(key)

    def set(self, key: str, value: str) -> None:
        if self._client:
            try:
                self._client.set(self._key(key), value)
                return
            except Exception as exc:
                self._switch_to_memory_fallback(exc)
        self._memory.set(key, value)

    def delete(self, key: str) -> None:
        if self._client:
            try:
                self._client.delete(self._key(key))
                return
            except Exception as exc:
                self._switch_to_memory_fallback(exc)
        self._memory.delete(key)
