from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.controllers.base import BaseController
from app.models.category_models import CategoryAttribute
from app.schemas.category_attribute_schemas import CategoryAttributesUpsertSchema


class CategoryAttributeController(
    BaseController[
        CategoryAttribute, CategoryAttributesUpsertSchema, CategoryAttributesUpsertSchema
    ]
):
    """
    Controller for the per-category attribute definition lists.
    """

    def get_by_category(
        self, db: Session, category_id: str
    ) -> Optional[CategoryAttribute]:
        return (
            db.query(self._model)
            .filter(self._model.category_id == category_id)
            .first()
        )

    def get_lists_for_categories(
        self, db: Session, category_ids: List[str]
    ) -> Dict[str, List[dict]]:
        """
        Reads the definition lists of several categories in one query.
        Categories without a row are absent from the result.
        """
        if not category_ids:
            return {}
        rows = (
            db.query(self._model)
            .filter(self._model.category_id.in_(category_ids))
            .all()
        )
        return {row.category_id: list(row.attributes or []) for row in rows}

    def replace(
        self, db: Session, *, category_id: str, attributes: List[dict]
    ) -> CategoryAttribute:
        db_obj = self.get_by_category(db, category_id)
        if db_obj is None:
            db_obj = self._model(category_id=category_id, attributes=attributes)
            db.add(db_obj)
        else:
            db_obj.attributes = attributes
        db.flush()
        db.refresh(db_obj)
        return db_obj

    def delete_by_category(self, db: Session, category_id: str) -> int:
        return (
            db.query(self._model)
            .filter(self._model.category_id == category_id)
            .delete(synchronize_session=False)
        )


category_attribute_controller = CategoryAttributeController(CategoryAttribute)
