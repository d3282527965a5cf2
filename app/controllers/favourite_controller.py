from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.controllers.base import BaseController
from app.models.favourite_models import Favourite
from app.models.product_models import Product
from app.schemas.favourite_schemas import FavouriteStatusSchema


class FavouriteController(
    BaseController[Favourite, FavouriteStatusSchema, FavouriteStatusSchema]
):
    """
    Controller for handling Favourite model operations.
    """

    def list_products(self, db: Session, *, user_id: str) -> List[Product]:
        rows = (
            db.query(self._model)
            .options(joinedload(self._model.product).joinedload(Product.category))
            .filter(self._model.user_id == user_id)
            .order_by(self._model.created_at.desc())
            .all()
        )
        return [row.product for row in rows]

    def get_entry(
        self, db: Session, *, user_id: str, product_id: str
    ) -> Optional[Favourite]:
        return (
            db.query(self._model)
            .filter(self._model.user_id == user_id, self._model.product_id == product_id)
            .first()
        )

    def count_for_user(self, db: Session, *, user_id: str) -> int:
        return (
            db.query(func.count(self._model.id))
            .filter(self._model.user_id == user_id)
            .scalar()
        )

    def clear_for_user(self, db: Session, *, user_id: str) -> int:
        return (
            db.query(self._model)
            .filter(self._model.user_id == user_id)
            .delete(synchronize_session=False)
        )


favourite_controller = FavouriteController(Favourite)
