# app/services/cart_service.py

import logging
from decimal import Decimal
from typing import Callable, Dict, Optional

from sqlalchemy.orm import Session

from app.controllers.cart_controller import cart_controller
from app.controllers.product_controller import product_controller
from app.core.exceptions import NotFoundError, ValidationFailedError
from app.models.cart_models import Cart, CartItem
from app.schemas.cart_schema import CartItemSchema, CartSchema
from app.schemas.product_schemas import ProductSchema

log = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")

# Coupon code -> discount for a given subtotal
COUPONS: Dict[str, Callable[[Decimal], Decimal]] = {
    "SAVE10": lambda subtotal: subtotal * Decimal("0.10"),
    "FIXED50": lambda subtotal: Decimal("50"),
}


def cart_subtotal(cart: Cart) -> Decimal:
    return sum((Decimal(item.price) * item.quantity for item in cart.items), Decimal("0"))


def coupon_discount(coupon: Optional[str], subtotal: Decimal) -> Decimal:
    """Discount of ``coupon`` on ``subtotal``, never more than the subtotal."""
    rule = COUPONS.get((coupon or "").upper())
    if rule is None:
        return Decimal("0")
    return min(rule(subtotal), subtotal).quantize(TWO_PLACES)


class CartService:
    """
    One cart per user. Totals are derived on every read, the stored cart
    only holds items and the coupon code.
    """

    def get_cart(self, db: Session, user_id: str) -> CartSchema:
        cart_controller.get_or_create(db, user_id=user_id)
        db.commit()
        return self.to_schema(db, user_id)

    def add_item(
        self, db: Session, user_id: str, product_id: str, quantity: int
    ) -> CartSchema:
        product = product_controller.get_active(db, product_id)
        if product is None:
            raise NotFoundError("product.productNotFound")
        if not product.in_stock or product.stock_quantity < quantity:
            raise ValidationFailedError("product.outOfStock")

        cart = cart_controller.get_or_create(db, user_id=user_id)
        item = cart_controller.get_item_by_product(db, cart=cart, product_id=product.id)
        if item is None:
            db.add(
                CartItem(
                    cart_id=cart.id,
                    product_id=product.id,
                    quantity=quantity,
                    price=product.price,
                )
            )
        else:
            new_quantity = item.quantity + quantity
            if product.stock_quantity < new_quantity:
                raise ValidationFailedError("product.insufficientStock")
            item.quantity = new_quantity
            item.price = product.price
        db.commit()
        return self.to_schema(db, user_id)

    def update_item(
        self, db: Session, user_id: str, item_id: str, quantity: int
    ) -> CartSchema:
        cart = self._existing_cart(db, user_id)
        item = cart_controller.get_item(db, cart=cart, item_id=item_id)
        if item is None:
            raise NotFoundError("cart.itemNotFound")
        product = product_controller.get_active(db, item.product_id)
        if product is None:
            raise NotFoundError("product.productNotFound")
        if product.stock_quantity < quantity:
            raise ValidationFailedError("product.insufficientStock")
        item.quantity = quantity
        db.commit()
        return self.to_schema(db, user_id)

    def remove_item(self, db: Session, user_id: str, item_id: str) -> CartSchema:
        cart = self._existing_cart(db, user_id)
        item = cart_controller.get_item(db, cart=cart, item_id=item_id)
        if item is None:
            raise NotFoundError("cart.itemNotFound")
        db.delete(item)
        db.commit()
        return self.to_schema(db, user_id)

    def clear(self, db: Session, user_id: str) -> None:
        cart = cart_controller.get_by_user(db, user_id=user_id)
        if cart is not None:
            cart_controller.clear(db, cart=cart)
            db.commit()

    def apply_coupon(self, db: Session, user_id: str, code: str) -> CartSchema:
        code = code.strip().upper()
        if code not in COUPONS:
            raise ValidationFailedError("coupon.invalid", errors={"code": ["coupon.invalid"]})
        cart = cart_controller.get_or_create(db, user_id=user_id)
        cart.coupon = code
        db.commit()
        log.info("Coupon %s applied to cart %s", code, cart.id)
        return self.to_schema(db, user_id)

    def remove_coupon(self, db: Session, user_id: str) -> CartSchema:
        cart = cart_controller.get_or_create(db, user_id=user_id)
        cart.coupon = None
        db.commit()
        return self.to_schema(db, user_id)

    def to_schema(self, db: Session, user_id: str) -> CartSchema:
        cart = cart_controller.get_or_create(db, user_id=user_id)
        subtotal = cart_subtotal(cart)
        discount = coupon_discount(cart.coupon, subtotal)
        items = [
            CartItemSchema(
                id=item.id,
                product_id=item.product_id,
                product=ProductSchema.model_validate(item.product) if item.product else None,
                quantity=item.quantity,
                price=item.price,
                total_price=Decimal(item.price) * item.quantity,
            )
            for item in cart.items
        ]
        return CartSchema(
            id=cart.id,
            items=items,
            coupon=cart.coupon,
            subtotal=subtotal,
            discount=discount,
            total=max(Decimal("0"), subtotal - discount),
            item_count=sum(item.quantity for item in cart.items),
        )

    @staticmethod
    def _existing_cart(db: Session, user_id: str) -> Cart:
        cart = cart_controller.get_by_user(db, user_id=user_id)
        if cart is None:
            raise NotFoundError("cart.cartNotFound")
        return cart


cart_service = CartService()
