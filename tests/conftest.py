"""Shared pytest fixtures for the client-state tests."""
from __future__ import annotations

import pytest

from sweetshop.core.dedup import NotificationDeduplicator
from sweetshop.core.notifications import InMemoryNotificationSink, Notifier
from sweetshop.core.storage import MemoryStorage
from sweetshop.domain.entities import Product, User
from sweetshop.services.cart_cache import CartCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def sink() -> InMemoryNotificationSink:
    return InMemoryNotificationSink()


@pytest.fixture()
def notifier(sink: InMemoryNotificationSink, clock: FakeClock) -> Notifier:
    return Notifier(sink, NotificationDeduplicator(window_seconds=3.0, clock=clock))


@pytest.fixture()
def make_product():
    """Factory for product snapshots with sensible defaults."""

    def _make(product_id: str = "p1", *, price: float = 1000, stock: int = 5, name: str | None = None):
        return Product(id=product_id, name=name or f"Bombones {product_id}", price=price, stock=stock)

    return _make


@pytest.fixture()
def cart(storage: MemoryStorage, notifier: Notifier) -> CartCache:
    return CartCache(storage, notifier, language="en")


@pytest.fixture()
def user_payload() -> dict:
    return {
        "id": "u1",
        "firstName": "Ana",
        "lastName": "García",
        "email": "ana@example.com",
        "role": "user",
        "emailVerified": True,
    }


@pytest.fixture()
def user(user_payload: dict) -> User:
    return User.model_validate(user_payload)
