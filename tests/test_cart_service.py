from decimal import Decimal
from unittest import mock

import pytest
from kombu.exceptions import OperationalError

from store.data.models import ProductOrderModel, UserModel
from store.domain.result import Ok, ValidationFailed
from store.services.cart_service import CartService, line_total
from store.services.category_service import CategoryService
from store.services.order_service import OrderService
from store.services.product_service import ProductService


@pytest.fixture
def shopper(db):
    user = UserModel(username="shopper", password="x", admin=False)
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def other(db):
    user = UserModel(username="someone", password="x", admin=False)
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def category(db):
    return CategoryService(db).create_category({"title": "Tools"}).item


@pytest.fixture
def product(db, category):
    return ProductService(db).create_product({
        "title": "Widget",
        "price": 2.5,
        "about": "desc",
        "img": "w.png",
        "categoryId": category.id,
    }).item


def test_line_total_is_price_times_quantity():
    assert line_total(Decimal("2.50"), 3) == Decimal("7.50")
    assert line_total(Decimal("0.10"), 3) == Decimal("0.30")
    assert line_total(Decimal("9.99"), 0) == Decimal("0.00")


def test_add_unknown_product_is_a_validation_error(db, shopper):
    result = CartService(db).add_to_cart(shopper.id, 12345, 1)

    assert isinstance(result, ValidationFailed)
    assert [e.field for e in result.errors] == ["product"]
    assert db.query(ProductOrderModel).count() == 0


@pytest.mark.parametrize("quantity", [-1, "2", 1.5, None])
def test_add_with_bad_quantity(db, shopper, product, quantity):
    result = CartService(db).add_to_cart(shopper.id, product.id, quantity)

    assert isinstance(result, ValidationFailed)
    assert [e.field for e in result.errors] == ["quantity"]
    assert db.query(ProductOrderModel).count() == 0


def test_add_largest_quantity_at_largest_price(db, shopper, category):
    expensive = ProductService(db).create_product({
        "title": "Yacht",
        "price": 99_999_999.99,
        "about": "big",
        "img": "y.png",
        "categoryId": category.id,
    }).item

    result = CartService(db).add_to_cart(shopper.id, expensive.id, 1000)

    assert isinstance(result, Ok)
    assert result.item["cart"].total == Decimal("99999999990.00")


@pytest.mark.parametrize("quantity", [1001, 10**30])
def test_add_with_oversized_quantity(db, shopper, product, quantity):
    result = CartService(db).add_to_cart(shopper.id, product.id, quantity)

    assert isinstance(result, ValidationFailed)
    assert [e.field for e in result.errors] == ["quantity"]
    assert db.query(ProductOrderModel).count() == 0


def test_add_prices_from_stored_product(db, shopper, product):
    result = CartService(db).add_to_cart(shopper.id, product.id, 3)

    assert isinstance(result, Ok)
    line = result.item["cart"]
    assert line.total == Decimal("7.50")
    assert line.quantity == 3
    assert line.user_id == shopper.id
    assert result.item["item"].id == product.id


def test_add_uses_price_at_time_of_call(db, shopper, product):
    svc = CartService(db)
    svc.add_to_cart(shopper.id, product.id, 2)
    ProductService(db).update_product(product.id, {"price": 10, "img": "w.png"})

    line = svc.add_to_cart(shopper.id, product.id, 2).item["cart"]

    assert line.total == Decimal("20.00")


def test_get_cart_only_returns_own_lines(db, shopper, other, product):
    svc = CartService(db)
    assert svc.get_cart(shopper.id) is None

    svc.add_to_cart(shopper.id, product.id, 1)
    svc.add_to_cart(shopper.id, product.id, 2)
    svc.add_to_cart(other.id, product.id, 5)

    cart = svc.get_cart(shopper.id)
    assert cart["user_id"] == shopper.id
    assert len(cart["items"]) == 2
    assert cart["total"] == Decimal("7.50")


def test_checkout_moves_cart_into_order(db, shopper, product):
    CartService(db).add_to_cart(shopper.id, product.id, 2)

    with mock.patch(
        "store.services.order_service.NotificationService.send_order_notification"
    ) as notify:
        result = OrderService(db).checkout(shopper.id, {"name": "Jon", "address": "<b>Main</b> St 1"})

    assert isinstance(result, Ok)
    order = result.item
    assert order["total"] == Decimal("5.00")
    assert order["address"] == "Main St 1"
    assert len(order["items"]) == 1
    notify.assert_called_once_with(shopper.id, order["id"])
    assert CartService(db).get_cart(shopper.id) is None


def test_checkout_runs_notification_task(db, shopper, product):
    CartService(db).add_to_cart(shopper.id, product.id, 1)

    result = OrderService(db).checkout(shopper.id, {"name": "Jon", "address": "Main St 1"})

    assert isinstance(result, Ok)


def test_checkout_with_empty_cart(db, shopper):
    result = OrderService(db).checkout(shopper.id, {"name": "Jon", "address": "Main St 1"})

    assert isinstance(result, ValidationFailed)
    assert [e.field for e in result.errors] == ["cart"]


def test_orders_visibility(db, shopper, other, product):
    carts = CartService(db)
    orders = OrderService(db)
    assert orders.get_orders(shopper.id) is None

    carts.add_to_cart(shopper.id, product.id, 1)
    orders.checkout(shopper.id, {"name": "Jon", "address": "A"})
    carts.add_to_cart(other.id, product.id, 1)
    orders.checkout(other.id, {"name": "Ann", "address": "B"})

    own = orders.get_orders(shopper.id)
    assert [o["user_id"] for o in own] == [shopper.id]

    everything = orders.get_orders(shopper.id, is_admin=True)
    assert sorted(o["user_id"] for o in everything) == sorted([shopper.id, other.id])


def test_checkout_survives_broker_outage(db, shopper, product):
    CartService(db).add_to_cart(shopper.id, product.id, 1)

    with mock.patch(
        "store.services.notification_service.send_order_notification_task.delay",
        side_effect=OperationalError("broker unreachable"),
    ):
        result = OrderService(db).checkout(shopper.id, {"name": "Jon", "address": "Main St 1"})

    assert isinstance(result, Ok)
    assert len(OrderService(db).get_orders(shopper.id)) == 1


def test_deleting_a_product_keeps_placed_orders(db, shopper, product):
    carts = CartService(db)
    orders = OrderService(db)
    carts.add_to_cart(shopper.id, product.id, 2)
    orders.checkout(shopper.id, {"name": "Jon", "address": "Main St 1"})
    carts.add_to_cart(shopper.id, product.id, 1)

    assert ProductService(db).delete_product(product.id) is True

    [order] = orders.get_orders(shopper.id)
    assert order["total"] == Decimal("5.00")
    assert [line.quantity for line in order["items"]] == [2]
    assert order["items"][0].product_id is None
    # the open cart line went with the product
    assert carts.get_cart(shopper.id) is None
