# app/controllers/product_controller.py

from typing import List, Optional

from sqlalchemy import case, update
from sqlalchemy.orm import Query, Session, joinedload

from app.controllers.base import BaseController
from app.models.cart_models import CartItem
from app.models.favourite_models import Favourite
from app.models.product_models import Product
from app.schemas.product_schemas import ProductCreateSchema, ProductUpdateSchema


class ProductController(BaseController[Product, ProductCreateSchema, ProductUpdateSchema]):
    """
    Controller for handling Product model operations.
    """

    def active_query(self, db: Session) -> Query:
        return (
            db.query(self._model)
            .options(joinedload(self._model.category))
            .filter(self._model.is_active.is_(True))
        )

    def get_active(self, db: Session, product_id: str) -> Optional[Product]:
        return self.active_query(db).filter(self._model.id == product_id).first()

    def get_active_by_slug(self, db: Session, slug: str) -> Optional[Product]:
        return self.active_query(db).filter(self._model.slug == slug).first()

    def get_related(
        self, db: Session, *, product: Product, limit: int = 4
    ) -> List[Product]:
        return (
            self.active_query(db)
            .filter(
                self._model.category_id == product.category_id,
                self._model.id != product.id,
            )
            .limit(limit)
            .all()
        )

    def slug_exists(
        self, db: Session, slug: str, *, exclude_id: Optional[str] = None
    ) -> bool:
        query = db.query(self._model.id).filter(self._model.slug == slug)
        if exclude_id:
            query = query.filter(self._model.id != exclude_id)
        return query.first() is not None

    def sku_exists(
        self, db: Session, sku: str, *, exclude_id: Optional[str] = None
    ) -> bool:
        query = db.query(self._model.id).filter(self._model.sku == sku)
        if exclude_id:
            query = query.filter(self._model.id != exclude_id)
        return query.first() is not None

    def increment_views(self, db: Session, product_id: str) -> None:
        db.execute(
            update(self._model)
            .where(self._model.id == product_id)
            .values(views=self._model.views + 1)
            .execution_options(synchronize_session=False)
        )

    def change_stock(self, db: Session, product_id: str, delta: int) -> bool:
        """
        Atomically adds ``delta`` (possibly negative) to the stock quantity.

        The update only matches while the resulting quantity stays at or
        above zero, so concurrent buyers cannot drive it negative. Returns
        whether a row was updated.
        """
        new_quantity = self._model.stock_quantity + delta
        result = db.execute(
            update(self._model)
            .where(self._model.id == product_id, new_quantity >= 0)
            .values(
                stock_quantity=new_quantity,
                in_stock=case((new_quantity > 0, True), else_=False),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def detach(self, db: Session, product_id: str) -> None:
        """Drops cart lines and favourites pointing at the product."""
        db.query(CartItem).filter(CartItem.product_id == product_id).delete(
            synchronize_session=False
        )
        db.query(Favourite).filter(Favourite.product_id == product_id).delete(
            synchronize_session=False
        )


product_controller = ProductController(Product)
