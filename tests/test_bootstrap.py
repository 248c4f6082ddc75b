"""Tests for client wiring."""
import pytest

from sweetshop.core.bootstrap import build_client, build_storage
from sweetshop.core.config import Settings, StorageConfig
from sweetshop.core.notifications import InMemoryNotificationSink
from sweetshop.core.storage import MemoryStorage
from sweetshop.integrations import redis_storage as redis_storage_module
from sweetshop.integrations.redis_storage import RedisStorage


def test_memory_storage_without_redis_url():
    assert isinstance(build_storage(Settings()), MemoryStorage)


def test_unreachable_redis_falls_back(monkeypatch):
    def _refuse(*args, **kwargs):
        raise ConnectionError("refused")

    monkeypatch.setattr(redis_storage_module.redis, "from_url", _refuse)
    settings = Settings(storage=StorageConfig(redis_url="redis://nowhere:6379/0"))

    storage = build_storage(settings)

    assert isinstance(storage, RedisStorage)
    assert storage.is_redis is False
    storage.set("cart-storage", "{}")
    assert storage.get("cart-storage") == "{}"


@pytest.mark.asyncio
async def test_configured_window_reaches_notifier():
    client = build_client(Settings(notification_window=0.5), storage=MemoryStorage())
    try:
        assert client.notifier.deduplicator.window_seconds == 0.5
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_build_client_wires_components(make_product):
    sink = InMemoryNotificationSink()
    storage = MemoryStorage()

    client = build_client(Settings(language="en"), sink=sink, storage=storage)
    try:
        assert client.api.token_store is client.session
        assert client.notifier.deduplicator.window_seconds == 3.0

        client.cart.add_item(make_product("p1"))
        assert sink.messages == ["Bombones p1 added to cart"]
        assert storage.get("cart-storage") is not None
        assert client.session.is_authenticated is False
    finally:
        await client.close()
