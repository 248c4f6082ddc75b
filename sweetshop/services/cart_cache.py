"""
Shopping cart state with stock guard, totals and durable persistence.

Line items go absent -> present(quantity >= 1) -> absent; a quantity of 0
is never stored. The only rejectable condition is asking for more units
than the product's stock snapshot: the call becomes a no-op and the user
is told through the notifier. Nothing here raises for that case.

Persisted shape under ``cart-storage``::

    {"items": [{"product": {...}, "quantity": 2}, ...]}
"""
from __future__ import annotations

import logging

from sweetshop.core.config import PricingConfig
from sweetshop.core.constants import (
    CART_STORAGE_KEY,
    DEFAULT_LANGUAGE,
    KIND_ADDED,
    KIND_CLEARED,
    KIND_REMOVED,
    KIND_STOCK_ERROR,
)
from sweetshop.core.exceptions import StorageException
from sweetshop.core.notifications import Notifier
from sweetshop.core.pricing import (
    Money,
    PricingResult,
    calc_item_count,
    calc_shipping_cost,
    calc_subtotal,
    calc_total,
    price_items,
)
from sweetshop.core.storage import KeyValueStorage, read_json, write_json
from sweetshop.domain.entities import LineItem, Product
from sweetshop.localization import get_text

logger = logging.getLogger(__name__)


class CartCache:
    """Owns the cart line items and the cart panel flag for one session."""

    def __init__(
        self,
        storage: KeyValueStorage,
        notifier: Notifier,
        *,
        pricing: PricingConfig | None = None,
        language: str = DEFAULT_LANGUAGE,
        storage_key: str = CART_STORAGE_KEY,
    ):
        self._storage = storage
        self._notifier = notifier
        self._pricing = pricing if pricing is not None else PricingConfig()
        self._language = language
        self._storage_key = storage_key
        self._items: list[LineItem] = self._load()
        self._is_open = False

    # ── Read ──────────────────────────────────────────────────────

    @property
    def items(self) -> tuple[LineItem, ...]:
        """Line items in insertion order."""
        return tuple(self._items)

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def is_empty(self) -> bool:
        return not self._items

    def _find_index(self, product_id: str) -> int | None:
        for idx, item in enumerate(self._items):
            if item.product.id == product_id:
                return idx
        return None

    def get_item_quantity(self, product_id: str) -> int:
        idx = self._find_index(product_id)
        return self._items[idx].quantity if idx is not None else 0

    # ── Write ─────────────────────────────────────────────────────

    def add_item(self, product: Product, quantity: int = 1) -> bool:
        """Add ``quantity`` units of ``product``, merging with an existing line.

        Returns False when the request was rejected (stock exceeded or a
        non-positive quantity); the cart is left untouched in that case.
        """
        if quantity <= 0:
            logger.warning("Ignored add_item with quantity %s for product %s", quantity, product.id)
            return False

        idx = self._find_index(product.id)
        current = self._items[idx].quantity if idx is not None else 0
        new_quantity = current + quantity
        if new_quantity > product.stock:
            self._reject_over_stock(product)
            return False

        # The caller's snapshot is the freshest one, keep it for pricing
        item = LineItem(product=product, quantity=new_quantity)
        if idx is not None:
            self._items[idx] = item
            message = get_text(self._language, "cart_quantity_updated", name=product.name)
        else:
            self._items.append(item)
            message = get_text(self._language, "cart_item_added", name=product.name)

        self._persist()
        self._notifier.success(message, kind=KIND_ADDED, key=product.id)
        return True

    def remove_item(self, product_id: str) -> bool:
        """Drop the line for ``product_id``. No-op without notification if absent."""
        idx = self._find_index(product_id)
        if idx is None:
            return False

        removed = self._items.pop(idx)
        self._persist()
        self._notifier.success(
            get_text(self._language, "cart_item_removed", name=removed.product.name),
            kind=KIND_REMOVED,
            key=product_id,
        )
        return True

    def update_quantity(self, product_id: str, quantity: int) -> bool:
        """Set the quantity of an existing line.

        ``quantity <= 0`` removes the line, exactly like ``remove_item``.
        """
        idx = self._find_index(product_id)
        if idx is None:
            return False

        if quantity <= 0:
            return self.remove_item(product_id)

        item = self._items[idx]
        if quantity > item.product.stock:
            self._reject_over_stock(item.product)
            return False

        self._items[idx] = item.model_copy(update={"quantity": quantity})
        self._persist()
        return True

    def clear_cart(self) -> None:
        self._items = []
        self._persist()
        self._notifier.success(get_text(self._language, "cart_cleared"), kind=KIND_CLEARED, key="cart")

    def _reject_over_stock(self, product: Product) -> None:
        logger.debug(
            "Rejected cart change for %s: only %s in stock", product.id, product.stock
        )
        self._notifier.error(
            get_text(self._language, "cart_stock_limit", stock=product.stock, name=product.name),
            kind=KIND_STOCK_ERROR,
            key=product.id,
        )

    # ── Panel ─────────────────────────────────────────────────────

    def open_cart(self) -> None:
        self._is_open = True

    def close_cart(self) -> None:
        self._is_open = False

    def toggle_cart(self) -> None:
        self._is_open = not self._is_open

    # ── Totals ────────────────────────────────────────────────────

    def get_subtotal(self) -> Money:
        return calc_subtotal(self._items)

    def get_shipping_cost(self) -> Money:
        return calc_shipping_cost(
            self.get_subtotal(),
            self._pricing.free_shipping_threshold,
            self._pricing.shipping_fee,
        )

    def get_total(self) -> Money:
        return calc_total(self.get_subtotal(), self.get_shipping_cost())

    def get_item_count(self) -> int:
        return calc_item_count(self._items)

    def get_pricing(self) -> PricingResult:
        return price_items(
            self._items,
            self._pricing.free_shipping_threshold,
            self._pricing.shipping_fee,
        )

    # ── Persistence ───────────────────────────────────────────────

    def _persist(self) -> None:
        """Write the full item list. A failed write never rolls back memory."""
        payload = {"items": [item.to_dict() for item in self._items]}
        try:
            write_json(self._storage, self._storage_key, payload)
        except StorageException as exc:
            logger.warning("Cart persistence failed: %s", exc.message)

    def _load(self) -> list[LineItem]:
        try:
            payload = read_json(self._storage, self._storage_key)
        except StorageException as exc:
            logger.warning("Discarding unreadable cart: %s", exc.message)
            return []
        if payload is None:
            return []
        if not isinstance(payload, dict) or not isinstance(payload.get("items"), list):
            logger.warning("Discarding cart with unexpected shape: %r", type(payload).__name__)
            return []

        items: list[LineItem] = []
        seen: set[str] = set()
        for raw in payload["items"]:
            try:
                product = Product.model_validate(raw["product"])
                quantity = int(raw["quantity"])
            except (KeyError, TypeError, ValueError, OverflowError) as exc:
                logger.warning("Skipping malformed cart item: %s", exc)
                continue
            if product.id in seen or quantity <= 0 or product.stock <= 0:
                continue
            seen.add(product.id)
            items.append(LineItem(product=product, quantity=min(quantity, product.stock)))
        return items
