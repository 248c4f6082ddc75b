"""Client bootstrap wiring storage, notifications, API client and caches."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sweetshop.integrations.api_client import StorefrontApiClient
from sweetshop.integrations.redis_storage import RedisStorage
from sweetshop.logging_config import setup_logging
from sweetshop.services.cart_cache import CartCache
from sweetshop.services.session_cache import SessionCache

from .config import Settings
from .dedup import NotificationDeduplicator
from .notifications import LoggingNotificationSink, NotificationSink, Notifier
from .storage import KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)


@dataclass
class ClientState:
    """Everything one browser session needs, constructed explicitly."""

    storage: KeyValueStorage
    notifier: Notifier
    api: StorefrontApiClient
    cart: CartCache
    session: SessionCache

    async def close(self) -> None:
        await self.api.close()


def build_storage(settings: Settings) -> KeyValueStorage:
    # Priority 1: Redis (survives restarts, shared between workers)
    if settings.storage.redis_url:
        storage = RedisStorage(settings.storage.redis_url, prefix=settings.storage.namespace)
        if storage.is_redis:
            logger.info("Using Redis for client storage")
        else:
            logger.warning("Redis unavailable, client storage falls back to memory")
        return storage

    # Priority 2: Memory (local dev, tests)
    logger.info("Using in-memory client storage; state is lost on restart")
    return MemoryStorage()


def build_client(
    settings: Settings,
    sink: NotificationSink | None = None,
    storage: KeyValueStorage | None = None,
) -> ClientState:
    """Create client runtime components from configuration."""
    setup_logging(settings.log_level)
    storage = storage if storage is not None else build_storage(settings)
    notifier = Notifier(
        sink if sink is not None else LoggingNotificationSink(),
        NotificationDeduplicator(settings.notification_window),
    )
    api = StorefrontApiClient(settings.api_url, timeout=settings.api_timeout)
    cart = CartCache(storage, notifier, pricing=settings.pricing, language=settings.language)
    session = SessionCache(storage, api, api, notifier, language=settings.language)
    api.token_store = session

    return ClientState(storage=storage, notifier=notifier, api=api, cart=cart, session=session)
