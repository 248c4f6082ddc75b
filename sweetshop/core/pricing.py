"""Shared helpers for cart totals and shipping."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sweetshop.domain.entities import LineItem

from .constants import FLAT_SHIPPING_FEE, FREE_SHIPPING_THRESHOLD

Money = float


@dataclass(frozen=True, slots=True)
class PricingResult:
    """Derived totals for a cart; recomputed on every request, never stored."""

    subtotal: Money
    shipping_cost: Money
    total: Money

    @property
    def free_shipping(self) -> bool:
        return self.shipping_cost == 0


def calc_subtotal(items: Iterable[LineItem]) -> Money:
    return sum((item.product.price * item.quantity for item in items), 0)


def calc_item_count(items: Iterable[LineItem]) -> int:
    return sum(item.quantity for item in items)


def calc_shipping_cost(
    subtotal: Money,
    threshold: Money = FREE_SHIPPING_THRESHOLD,
    flat_fee: Money = FLAT_SHIPPING_FEE,
) -> Money:
    """Shipping is free from ``threshold`` upwards, otherwise ``flat_fee``."""
    if subtotal >= threshold:
        return 0
    return flat_fee


def calc_total(subtotal: Money, shipping_cost: Money) -> Money:
    return subtotal + shipping_cost


def price_items(
    items: Iterable[LineItem],
    threshold: Money = FREE_SHIPPING_THRESHOLD,
    flat_fee: Money = FLAT_SHIPPING_FEE,
) -> PricingResult:
    subtotal = calc_subtotal(items)
    shipping_cost = calc_shipping_cost(subtotal, threshold, flat_fee)
    return PricingResult(
        subtotal=subtotal,
        shipping_cost=shipping_cost,
        total=calc_total(subtotal, shipping_cost),
    )


def format_price(amount: Money) -> str:
    """Render an amount the way the storefront shows prices, e.g. ``$ 8.000``."""
    rounded = int(round(amount))
    sign = "-" if rounded < 0 else ""
    grouped = f"{abs(rounded):,}".replace(",", ".")
    return f"{sign}$ {grouped}"
