"""Tests for the in-memory cart."""

from locals_client.domain.models import Product
from locals_client.services.cart import CartService


def _product(product_id: str, price: float) -> Product:
    return Product.model_validate(
        {"_id": product_id, "name": product_id, "price": price}
    )


def test_add_merges_same_product_and_size() -> None:
    cart = CartService()
    shirt = _product("shirt", 499.0)

    cart.add_item(shirt, 1, size="M")
    cart.add_item(shirt, 2, size="M")
    cart.add_item(shirt, 1, size="L")

    assert len(cart.lines) == 2
    assert cart.get_size_qty("shirt", "M") == 3
    assert cart.get_qty("shirt") == 4
    assert cart.count == 4
    assert cart.total == 1996.0


def test_update_qty_without_size_touches_every_line() -> None:
    cart = CartService()
    shirt = _product("shirt", 100.0)
    cart.add_item(shirt, 1, size="M")
    cart.add_item(shirt, 1, size="L")

    cart.update_qty("shirt", 5)

    assert [line.quantity for line in cart.lines] == [5, 5]


def test_update_qty_to_zero_removes_line() -> None:
    cart = CartService()
    cart.add_item(_product("tea", 40.0), 2)
    cart.add_item(_product("sugar", 55.5), 1)

    cart.update_qty("tea", 0)

    assert [line.product_id for line in cart.lines] == ["sugar"]
    assert cart.total == 55.5
    assert cart.lines[0].line_total == 55.5


def test_remove_by_size_and_clear() -> None:
    cart = CartService()
    shirt = _product("shirt", 100.0)
    cart.add_item(shirt, 1, size="M")
    cart.add_item(shirt, 1, size="L")

    cart.remove_item("shirt", "M")
    assert cart.get_size_qty("shirt", "M") == 0
    assert cart.get_qty("shirt") == 1

    cart.clear()
    assert cart.count == 0
    assert cart.total == 0
