from typing import Optional

from sqlalchemy.orm import Session, joinedload

from app.controllers.base import BaseController
from app.models.cart_models import Cart, CartItem
from app.models.product_models import Product
from app.schemas.cart_schema import CartItemAddSchema, CartItemUpdateSchema


class CartController(BaseController[Cart, CartItemAddSchema, CartItemUpdateSchema]):
    """
    Controller for handling Cart and CartItem operations.
    """

    def get_by_user(self, db: Session, *, user_id: str) -> Optional[Cart]:
        return (
            db.query(self._model)
            .options(
                joinedload(self._model.items)
                .joinedload(CartItem.product)
                .joinedload(Product.category)
            )
            .filter(self._model.user_id == user_id)
            .first()
        )

    def get_or_create(self, db: Session, *, user_id: str) -> Cart:
        cart = self.get_by_user(db, user_id=user_id)
        if cart is None:
            cart = Cart(user_id=user_id)
            db.add(cart)
            db.flush()
            db.refresh(cart)
        return cart

    def get_item(self, db: Session, *, cart: Cart, item_id: str) -> Optional[CartItem]:
        return (
            db.query(CartItem)
            .filter(CartItem.cart_id == cart.id, CartItem.id == item_id)
            .first()
        )

    def get_item_by_product(
        self, db: Session, *, cart: Cart, product_id: str
    ) -> Optional[CartItem]:
        return (
            db.query(CartItem)
            .filter(CartItem.cart_id == cart.id, CartItem.product_id == product_id)
            .first()
        )

    def clear(self, db: Session, *, cart: Cart) -> None:
        db.query(CartItem).filter(CartItem.cart_id == cart.id).delete(
            synchronize_session=False
        )
        cart.coupon = None
        db.flush()
        db.expire(cart, ["items"])


cart_controller = CartController(Cart)
