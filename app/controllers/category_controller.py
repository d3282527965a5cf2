# app/controllers/category_controller.py

from typing import Iterable, List, Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from app.controllers.base import BaseController
from app.models.category_models import Category
from app.models.product_models import Product
from app.schemas.category_schemas import CategoryCreateSchema, CategoryUpdateSchema


class CategoryController(
    BaseController[Category, CategoryCreateSchema, CategoryUpdateSchema]
):
    """
    Persistence operations over the category tree. Parent links are resolved
    through queries, the tree is never loaded into memory as a whole here.
    """

    def get_active(self, db: Session, category_id: str) -> Optional[Category]:
        return (
            db.query(self._model)
            .filter(self._model.id == category_id, self._model.is_active.is_(True))
            .first()
        )

    def get_by_slug(
        self, db: Session, slug: str, *, active_only: bool = True
    ) -> Optional[Category]:
        query = db.query(self._model).filter(self._model.slug == slug)
        if active_only:
            query = query.filter(self._model.is_active.is_(True))
        return query.first()

    def get_child_by_slug(
        self, db: Session, *, slug: str, parent_id: Optional[str]
    ) -> Optional[Category]:
        """
        Finds the active category with ``slug`` directly under ``parent_id``
        (``None`` meaning the root level).
        """
        query = db.query(self._model).filter(
            self._model.slug == slug, self._model.is_active.is_(True)
        )
        if parent_id is None:
            query = query.filter(self._model.parent_id.is_(None))
        else:
            query = query.filter(self._model.parent_id == parent_id)
        return query.first()

    def get_children(
        self, db: Session, parent_id: str, *, active_only: bool = True
    ) -> List[Category]:
        query = db.query(self._model).filter(self._model.parent_id == parent_id)
        if active_only:
            query = query.filter(self._model.is_active.is_(True))
        return query.order_by(self._model.name).all()

    def get_child_ids(self, db: Session, parent_ids: Iterable[str]) -> List[str]:
        parent_ids = list(parent_ids)
        if not parent_ids:
            return []
        rows = (
            db.query(self._model.id)
            .filter(self._model.parent_id.in_(parent_ids))
            .all()
        )
        return [row.id for row in rows]

    def get_parent_id(self, db: Session, category_id: str) -> Optional[str]:
        row = (
            db.query(self._model.id, self._model.parent_id)
            .filter(self._model.id == category_id)
            .first()
        )
        return row.parent_id if row else None

    def exists(self, db: Session, category_id: str) -> bool:
        return (
            db.query(self._model.id).filter(self._model.id == category_id).first()
            is not None
        )

    def list_categories(
        self,
        db: Session,
        *,
        parent_id: Optional[str] = None,
        roots_only: bool = False,
        include_inactive: bool = False,
    ) -> List[Category]:
        query = db.query(self._model)
        if roots_only:
            query = query.filter(self._model.parent_id.is_(None))
        elif parent_id:
            query = query.filter(self._model.parent_id == parent_id)
        if not include_inactive:
            query = query.filter(self._model.is_active.is_(True))
        return query.order_by(self._model.name).all()

    def slug_exists(
        self, db: Session, slug: str, *, exclude_id: Optional[str] = None
    ) -> bool:
        query = db.query(self._model.id).filter(self._model.slug == slug)
        if exclude_id:
            query = query.filter(self._model.id != exclude_id)
        return query.first() is not None

    def name_exists(
        self, db: Session, name: str, *, exclude_id: Optional[str] = None
    ) -> bool:
        query = db.query(self._model.id).filter(
            func.lower(self._model.name) == name.lower()
        )
        if exclude_id:
            query = query.filter(self._model.id != exclude_id)
        return query.first() is not None

    def count_children(self, db: Session, category_id: str) -> int:
        return (
            db.query(func.count(self._model.id))
            .filter(self._model.parent_id == category_id)
            .scalar()
        )

    def count_products(self, db: Session, category_id: str) -> int:
        return (
            db.query(func.count(Product.id))
            .filter(Product.category_id == category_id)
            .scalar()
        )

    def set_active_many(self, db: Session, ids: List[str], is_active: bool) -> int:
        if not ids:
            return 0
        result = db.execute(
            update(self._model)
            .where(self._model.id.in_(ids))
            .values(is_active=is_active)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount


category_controller = CategoryController(Category)
