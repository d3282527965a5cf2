import random
import string
import time
from typing import Optional

from sqlalchemy.orm import Query, Session, selectinload

from app.controllers.base import BaseController
from app.models.order_models import Order
from app.schemas.order_schemas import OrderStatusUpdateRequest, PlaceOrderRequest

BASE36_ALPHABET = string.digits + string.ascii_uppercase


def _to_base36(number: int) -> str:
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits)) or "0"


def generate_order_number() -> str:
    """``ORD-<millis in base36>-<4 random chars>``, e.g. ``ORD-LZ3K1Q2A-7GQX``."""
    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(random.choices(BASE36_ALPHABET, k=4))
    return f"ORD-{timestamp}-{suffix}"


class OrderController(BaseController[Order, PlaceOrderRequest, OrderStatusUpdateRequest]):
    """
    Controller for handling Order model operations.
    """

    def query_for_user(self, db: Session, *, user_id: str) -> Query:
        return (
            db.query(self._model)
            .options(selectinload(self._model.items))
            .filter(self._model.user_id == user_id)
        )

    def get_for_user(
        self, db: Session, *, order_id: str, user_id: str
    ) -> Optional[Order]:
        return (
            self.query_for_user(db, user_id=user_id)
            .filter(self._model.id == order_id)
            .first()
        )

    def order_number_exists(self, db: Session, order_number: str) -> bool:
        return (
            db.query(self._model.id)
            .filter(self._model.order_number == order_number)
            .first()
            is not None
        )


order_controller = OrderController(Order)
