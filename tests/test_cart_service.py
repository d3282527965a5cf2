"""
Tests for the cart: stock checks, derived totals and coupons.
"""

from decimal import Decimal

import pytest

from app.core.exceptions import NotFoundError, ValidationFailedError
from app.services.cart_service import cart_service, coupon_discount


@pytest.fixture
def laptop(electronics_tree, make_product):
    return make_product("Office Laptop", electronics_tree["laptops"], price="200.00", stock=3)


class TestCouponDiscount:

    def test_percentage(self):
        assert coupon_discount("SAVE10", Decimal("250.00")) == Decimal("25.00")

    def test_fixed_amount(self):
        assert coupon_discount("FIXED50", Decimal("250.00")) == Decimal("50.00")

    def test_never_exceeds_subtotal(self):
        assert coupon_discount("FIXED50", Decimal("30.00")) == Decimal("30.00")

    def test_code_is_case_insensitive(self):
        assert coupon_discount("save10", Decimal("100")) == Decimal("10.00")

    def test_unknown_or_missing(self):
        assert coupon_discount("NOPE", Decimal("100")) == Decimal("0")
        assert coupon_discount(None, Decimal("100")) == Decimal("0")


class TestCart:

    def test_new_cart_is_empty(self, db, customer):
        cart = cart_service.get_cart(db, customer.id)

        assert cart.items == []
        assert cart.total == 0
        assert cart.item_count == 0

    def test_add_item_snapshots_price(self, db, customer, laptop):
        cart = cart_service.add_item(db, customer.id, laptop.id, 2)

        assert cart.item_count == 2
        assert cart.subtotal == 400
        assert cart.items[0].price == 200
        assert cart.items[0].total_price == 400

    def test_adding_same_product_merges_lines(self, db, customer, laptop):
        cart_service.add_item(db, customer.id, laptop.id, 1)
        cart = cart_service.add_item(db, customer.id, laptop.id, 2)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_cannot_exceed_stock(self, db, customer, laptop):
        with pytest.raises(ValidationFailedError) as exc:
            cart_service.add_item(db, customer.id, laptop.id, 4)
        assert exc.value.key == "product.outOfStock"

    def test_merged_quantity_cannot_exceed_stock(self, db, customer, laptop):
        cart_service.add_item(db, customer.id, laptop.id, 2)

        with pytest.raises(ValidationFailedError) as exc:
            cart_service.add_item(db, customer.id, laptop.id, 2)
        assert exc.value.key == "product.insufficientStock"

    def test_unknown_product(self, db, customer):
        with pytest.raises(NotFoundError):
            cart_service.add_item(db, customer.id, "missing", 1)

    def test_update_and_remove_item(self, db, customer, laptop):
        cart = cart_service.add_item(db, customer.id, laptop.id, 1)
        item_id = cart.items[0].id

        cart = cart_service.update_item(db, customer.id, item_id, 3)
        assert cart.items[0].quantity == 3

        cart = cart_service.remove_item(db, customer.id, item_id)
        assert cart.items == []

    def test_update_beyond_stock(self, db, customer, laptop):
        cart = cart_service.add_item(db, customer.id, laptop.id, 1)

        with pytest.raises(ValidationFailedError):
            cart_service.update_item(db, customer.id, cart.items[0].id, 10)

    def test_clear_drops_items_and_coupon(self, db, customer, laptop):
        cart_service.add_item(db, customer.id, laptop.id, 1)
        cart_service.apply_coupon(db, customer.id, "SAVE10")

        cart_service.clear(db, customer.id)

        cart = cart_service.get_cart(db, customer.id)
        assert cart.items == []
        assert cart.coupon is None


class TestCoupons:

    def test_apply_coupon(self, db, customer, laptop):
        cart_service.add_item(db, customer.id, laptop.id, 1)

        cart = cart_service.apply_coupon(db, customer.id, " save10 ")

        assert cart.coupon == "SAVE10"
        assert cart.discount == 20
        assert cart.total == 180

    def test_discount_follows_cart_changes(self, db, customer, laptop):
        cart_service.add_item(db, customer.id, laptop.id, 1)
        cart_service.apply_coupon(db, customer.id, "SAVE10")

        cart = cart_service.add_item(db, customer.id, laptop.id, 1)

        assert cart.discount == 40

    def test_invalid_coupon(self, db, customer):
        with pytest.raises(ValidationFailedError) as exc:
            cart_service.apply_coupon(db, customer.id, "FREE100")
        assert exc.value.key == "coupon.invalid"

    def test_remove_coupon(self, db, customer, laptop):
        cart_service.add_item(db, customer.id, laptop.id, 1)
        cart_service.apply_coupon(db, customer.id, "FIXED50")

        cart = cart_service.remove_coupon(db, customer.id)

        assert cart.coupon is None
        assert cart.total == 200
