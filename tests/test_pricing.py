from sweetshop.core.pricing import (
    calc_item_count,
    calc_shipping_cost,
    calc_subtotal,
    calc_total,
    format_price,
    price_items,
)
from sweetshop.domain.entities import LineItem, Product


def _item(price: float, quantity: int, stock: int = 100) -> LineItem:
    product = Product(id=f"p{price}-{quantity}", name="Trufa", price=price, stock=stock)
    return LineItem(product=product, quantity=quantity)


def test_calc_subtotal_multiplies_price_by_quantity() -> None:
    items = [_item(1500, 2), _item(700, 3)]
    assert calc_subtotal(items) == 5100


def test_calc_subtotal_of_empty_cart_is_zero() -> None:
    assert calc_subtotal([]) == 0


def test_calc_item_count_sums_quantities() -> None:
    assert calc_item_count([_item(100, 2), _item(200, 5)]) == 7


def test_shipping_is_charged_below_threshold() -> None:
    assert calc_shipping_cost(7999) == 5000
    assert calc_total(7999, calc_shipping_cost(7999)) == 12999


def test_shipping_is_free_from_threshold() -> None:
    assert calc_shipping_cost(8000) == 0
    assert calc_total(8000, calc_shipping_cost(8000)) == 8000
    assert calc_shipping_cost(20000) == 0


def test_shipping_uses_custom_threshold_and_fee() -> None:
    assert calc_shipping_cost(900, threshold=1000, flat_fee=150) == 150
    assert calc_shipping_cost(1000, threshold=1000, flat_fee=150) == 0


def test_total_is_subtotal_plus_shipping_for_any_subtotal() -> None:
    for subtotal in (0, 1, 4000, 7999, 8000, 8001, 150000):
        assert calc_total(subtotal, calc_shipping_cost(subtotal)) == subtotal + calc_shipping_cost(
            subtotal
        )


def test_price_items_bundles_all_totals() -> None:
    result = price_items([_item(4000, 2)])

    assert result.subtotal == 8000
    assert result.shipping_cost == 0
    assert result.total == 8000
    assert result.free_shipping


def test_format_price_uses_dot_grouping() -> None:
    assert format_price(8000) == "$ 8.000"
    assert format_price(1234567) == "$ 1.234.567"
    assert format_price(0) == "$ 0"
