"""
Tests for checkout, order placement and the order status workflow.
"""

import re

import pytest

from app.controllers.order_controller import generate_order_number
from app.controllers.product_controller import product_controller
from app.core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from app.models.cart_models import CartItem
from app.models.internal_model import Address
from app.models.order_models import OrderStatus, PaymentMethod, PaymentStatus
from app.models.product_models import Product
from app.schemas.order_schemas import PlaceOrderRequest
from app.services.cart_service import cart_service
from app.services.order_service import order_service


@pytest.fixture
def laptop(electronics_tree, make_product):
    return make_product("Office Laptop", electronics_tree["laptops"], price="200.00", stock=5)


@pytest.fixture
def mouse(electronics_tree, make_product):
    return make_product("Mouse", electronics_tree["laptops"], price="25.00", stock=1)


@pytest.fixture
def filled_cart(db, customer, laptop, mouse):
    cart_service.add_item(db, customer.id, laptop.id, 2)
    cart_service.add_item(db, customer.id, mouse.id, 1)


def place(db, customer, address, **extra):
    return order_service.place_order(
        db, customer.id, PlaceOrderRequest(address_id=address.id, **extra)
    )


def stock_of(db, product):
    db.expire_all()
    return db.get(Product, product.id).stock_quantity


class TestOrderNumber:

    def test_format(self):
        assert re.match(r"^ORD-[0-9A-Z]+-[0-9A-Z]{4}$", generate_order_number())


class TestCheckoutSummary:

    def test_includes_flat_shipping(self, db, customer, filled_cart):
        summary = order_service.checkout_summary(db, customer.id)

        assert summary.subtotal == 425
        assert summary.shipping_cost == 50
        assert summary.total == 475
        assert summary.item_count == 3

    def test_empty_cart_has_no_shipping(self, db, customer):
        summary = order_service.checkout_summary(db, customer.id)

        assert summary.shipping_cost == 0
        assert summary.total == 0


class TestPlaceOrder:

    def test_decrements_stock_and_clears_cart(self, db, customer, address, laptop, mouse, filled_cart):
        order = place(db, customer, address)

        assert order.status == OrderStatus.PENDING.value
        assert order.payment_status == PaymentStatus.PENDING.value
        assert order.order_number.startswith("ORD-")
        assert float(order.total) == 475
        assert stock_of(db, laptop) == 3
        assert stock_of(db, mouse) == 0
        assert db.get(Product, mouse.id).in_stock is False
        assert db.query(CartItem).count() == 0

    def test_snapshots_items_and_address(self, db, customer, address, filled_cart):
        order = place(db, customer, address)

        address.street = "Somewhere else"
        db.commit()
        db.refresh(order)

        assert order.shipping_address["street"] == "Harbour street 1"
        assert sorted(i.product_name for i in order.items) == ["Mouse", "Office Laptop"]

    def test_coupon_carries_over(self, db, customer, address, filled_cart):
        cart_service.apply_coupon(db, customer.id, "FIXED50")

        order = place(db, customer, address)

        assert order.coupon == "FIXED50"
        assert float(order.discount) == 50
        assert float(order.total) == 425

    def test_empty_cart(self, db, customer, address):
        with pytest.raises(ValidationFailedError) as exc:
            place(db, customer, address)
        assert exc.value.key == "order.emptyCart"

    def test_foreign_address(self, db, customer, filled_cart, admin):
        other = Address(
            user_id=admin.id, name="Office", phone="1", city="c", area="a", street="s"
        )
        db.add(other)
        db.commit()

        with pytest.raises(NotFoundError) as exc:
            place(db, customer, other)
        assert exc.value.key == "order.addressNotFound"

    def test_out_of_stock_aborts_whole_order(self, db, customer, address, laptop, mouse, filled_cart):
        mouse.stock_quantity = 0
        mouse.in_stock = False
        db.commit()

        with pytest.raises(ConflictError) as exc:
            place(db, customer, address)

        assert exc.value.key == "order.productOutOfStock"
        assert exc.value.params == {"name": "Mouse"}
        assert stock_of(db, laptop) == 5
        assert db.query(CartItem).count() == 2

    def test_stock_race_rolls_back(self, db, customer, address, laptop, mouse, filled_cart, monkeypatch):
        original = product_controller.change_stock

        def change_stock(session, product_id, delta):
            if product_id == mouse.id:
                return False
            return original(session, product_id, delta)

        monkeypatch.setattr(product_controller, "change_stock", change_stock)

        with pytest.raises(ConflictError):
            place(db, customer, address)

        assert stock_of(db, laptop) == 5
        assert db.query(CartItem).count() == 2


class TestCancel:

    def test_cancel_restores_stock(self, db, customer, address, laptop, mouse, filled_cart):
        order = place(db, customer, address)

        cancelled = order_service.cancel_order(db, customer.id, order.id)

        assert cancelled.status == OrderStatus.CANCELLED.value
        assert stock_of(db, laptop) == 5
        assert stock_of(db, mouse) == 1
        assert db.get(Product, mouse.id).in_stock is True

    def test_cannot_cancel_shipped_order(self, db, customer, address, filled_cart):
        order = place(db, customer, address)
        for status in ("confirmed", "processing", "shipped"):
            order_service.update_status(db, order.id, OrderStatus(status))

        with pytest.raises(ValidationFailedError) as exc:
            order_service.cancel_order(db, customer.id, order.id)
        assert exc.value.key == "order.cannotCancel"

    def test_other_users_order_is_not_found(self, db, customer, admin, address, filled_cart):
        order = place(db, customer, address)

        with pytest.raises(NotFoundError):
            order_service.cancel_order(db, admin.id, order.id)


class TestStatusWorkflow:

    def test_invalid_transition(self, db, customer, address, filled_cart):
        order = place(db, customer, address)

        with pytest.raises(ValidationFailedError) as exc:
            order_service.update_status(db, order.id, OrderStatus.SHIPPED)
        assert exc.value.key == "order.invalidOrderStatus"

    def test_delivered_cash_order_is_paid(self, db, customer, address, filled_cart):
        order = place(db, customer, address, payment_method=PaymentMethod.COD)
        for status in ("confirmed", "processing", "shipped", "delivered"):
            order = order_service.update_status(db, order.id, OrderStatus(status))

        assert order.status == "delivered"
        assert order.payment_status == PaymentStatus.PAID.value

    def test_cancelling_paid_order_refunds(self, db, customer, address, filled_cart):
        order = place(db, customer, address, payment_method=PaymentMethod.CARD)
        order_service.update_payment_status(db, order.id, PaymentStatus.PAID)

        order = order_service.update_status(db, order.id, OrderStatus.CANCELLED)

        assert order.status == "cancelled"
        assert order.payment_status == PaymentStatus.REFUNDED.value
