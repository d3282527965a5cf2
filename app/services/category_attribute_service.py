# app/services/category_attribute_service.py

import logging
from collections import Counter
from typing import Dict, List

from sqlalchemy.orm import Session

from app.controllers.category_attribute_controller import category_attribute_controller
from app.controllers.category_controller import category_controller
from app.core.exceptions import ConflictError, NotFoundError
from app.schemas.category_attribute_schemas import (
    AttributeDefinitionSchema,
    CategoryAttributesSchema,
    EffectiveFiltersSchema,
)
from app.services.category_service import category_service

log = logging.getLogger(__name__)


class CategoryAttributeService:
    """
    Attribute definitions are declared per category and inherited down the
    tree. A definition declared closer to the category overrides an
    ancestor's definition with the same key.
    """

    def effective_filters(self, db: Session, category_id: str) -> EffectiveFiltersSchema:
        if not category_controller.exists(db, category_id):
            raise NotFoundError("category.categoryNotFound")

        chain_ids = [c.id for c in category_service.ancestor_chain(db, category_id)]
        lists = category_attribute_controller.get_lists_for_categories(db, chain_ids)

        merged: Dict[str, dict] = {}
        for ancestor_id in chain_ids:
            for definition in lists.get(ancestor_id, []):
                key = definition.get("key")
                if not key:
                    continue
                merged[key] = definition

        filters = [
            AttributeDefinitionSchema.model_validate(definition)
            for definition in merged.values()
            if definition.get("filterable", True)
        ]
        # sorted() is stable, equal orders keep root-first position
        filters = sorted(filters, key=lambda item: item.order)
        return EffectiveFiltersSchema(category_id=category_id, filters=filters)

    def raw_definitions(self, db: Session, category_id: str) -> CategoryAttributesSchema:
        if not category_controller.exists(db, category_id):
            raise NotFoundError("category.categoryNotFound")
        row = category_attribute_controller.get_by_category(db, category_id)
        attributes = row.attributes if row else []
        return CategoryAttributesSchema(
            category_id=category_id,
            attributes=[AttributeDefinitionSchema.model_validate(a) for a in attributes],
        )

    def upsert(
        self,
        db: Session,
        category_id: str,
        definitions: List[AttributeDefinitionSchema],
    ) -> CategoryAttributesSchema:
        """Replaces the category's own definition list as a whole."""
        if not category_controller.exists(db, category_id):
            raise NotFoundError("category.categoryNotFound")

        counts = Counter(definition.key for definition in definitions)
        duplicates = [key for key, count in counts.items() if count > 1]
        if duplicates:
            raise ConflictError("categoryAttribute.duplicateKey", key=duplicates[0])

        payload = [definition.model_dump(mode="json") for definition in definitions]
        row = category_attribute_controller.replace(
            db, category_id=category_id, attributes=payload
        )
        db.commit()
        log.info(
            "Saved %s attribute definitions for category %s", len(payload), category_id
        )
        return CategoryAttributesSchema(
            category_id=category_id,
            attributes=[AttributeDefinitionSchema.model_validate(a) for a in row.attributes],
        )

    def delete(self, db: Session, category_id: str) -> None:
        category_attribute_controller.delete_by_category(db, category_id)
        db.commit()


category_attribute_service = CategoryAttributeService()
