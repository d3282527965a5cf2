# app/services/category_service.py

import logging
import random
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.controllers.category_attribute_controller import category_attribute_controller
from app.controllers.category_controller import category_controller
from app.controllers.product_controller import product_controller
from app.core.exceptions import ConflictError, InternalError, NotFoundError
from app.models.category_models import Category
from app.models.product_models import Product
from app.schemas.category_schemas import (
    BreadcrumbItemSchema,
    CategoryCreateSchema,
    CategoryDetailSchema,
    CategoryPathSchema,
    CategorySchema,
    CategoryShortSchema,
    CategoryTreeNodeSchema,
    CategoryUpdateSchema,
)
from app.schemas.product_schemas import (
    HomepageSectionSchema,
    ProductCategorySchema,
    ProductSchema,
)
from app.utils.slug import SlugExhaustedError, unique_slug

log = logging.getLogger(__name__)

HOMEPAGE_SORTS = ("newest", "popular", "random")


class CategoryService:
    """
    Business rules of the category tree: path resolution, ancestry and
    descendant walks, and the create/update/delete rules that keep the
    parent chain acyclic.
    """

    # --- Reads ---

    def get_or_404(self, db: Session, category_id: str) -> Category:
        category = category_controller.get(db, category_id)
        if category is None:
            raise NotFoundError("category.categoryNotFound")
        return category

    def resolve_path(self, db: Session, slugs: List[str]) -> CategoryPathSchema:
        """
        Walks ``slugs`` from the root level down, each segment being looked
        up among the active children of the previous one.
        """
        slugs = [slug for slug in slugs if slug]
        if not slugs:
            raise NotFoundError("category.invalidPath")

        current: Optional[Category] = None
        breadcrumb: List[BreadcrumbItemSchema] = []
        for slug in slugs:
            parent_id = current.id if current else None
            current = category_controller.get_child_by_slug(
                db, slug=slug, parent_id=parent_id
            )
            if current is None:
                raise NotFoundError("category.categoryNotFound")
            breadcrumb.append(self._crumb(current))

        children = category_controller.get_children(db, current.id)
        is_leaf = not children
        return CategoryPathSchema(
            category=CategorySchema.model_validate(current),
            children=[CategoryShortSchema.model_validate(c) for c in children],
            breadcrumb=breadcrumb,
            is_leaf=is_leaf,
            has_products=is_leaf,
        )

    def breadcrumb(self, db: Session, category_id: str) -> List[BreadcrumbItemSchema]:
        """Ancestors of the category, root first, the category itself last."""
        chain = self.ancestor_chain(db, category_id)
        return [self._crumb(category) for category in chain]

    def ancestor_chain(self, db: Session, category_id: str) -> List[Category]:
        chain: List[Category] = []
        seen = set()
        current = category_controller.get(db, category_id)
        while current is not None and current.id not in seen:
            seen.add(current.id)
            chain.append(current)
            current = category_controller.get(db, current.parent_id)
        chain.reverse()
        return chain

    def subtree_ids(self, db: Session, category_id: str) -> List[str]:
        """
        Every descendant id of the category, excluding the category itself,
        collected one tree level per query.
        """
        result: List[str] = []
        seen = {category_id}
        frontier = [category_id]
        while frontier:
            children = [
                child_id
                for child_id in category_controller.get_child_ids(db, frontier)
                if child_id not in seen
            ]
            seen.update(children)
            result.extend(children)
            frontier = children
        return result

    def root_categories(self, db: Session) -> List[Category]:
        return category_controller.list_categories(db, roots_only=True)

    def list_categories(
        self,
        db: Session,
        *,
        parent_id: Optional[str] = None,
        include_inactive: bool = False,
    ) -> List[Category]:
        return category_controller.list_categories(
            db, parent_id=parent_id, include_inactive=include_inactive
        )

    def category_tree(
        self, db: Session, *, include_inactive: bool = False
    ) -> List[CategoryTreeNodeSchema]:
        """
        Builds the nested tree in memory from one flat read. A node whose
        parent is absent from the read (missing or filtered out) is shown
        as a root.
        """
        categories = category_controller.list_categories(
            db, include_inactive=include_inactive
        )
        nodes: Dict[str, CategoryTreeNodeSchema] = {
            category.id: CategoryTreeNodeSchema.model_validate(category)
            for category in categories
        }
        roots: List[CategoryTreeNodeSchema] = []
        for category in categories:
            node = nodes[category.id]
            parent = nodes.get(category.parent_id) if category.parent_id else None
            if parent is None:
                roots.append(node)
            else:
                parent.children.append(node)
        return roots

    def get_by_id(self, db: Session, category_id: str) -> CategoryDetailSchema:
        category = category_controller.get_active(db, category_id)
        if category is None:
            raise NotFoundError("category.categoryNotFound")
        return self._detail(db, category)

    def get_by_slug(self, db: Session, slug: str) -> CategoryDetailSchema:
        category = category_controller.get_by_slug(db, slug)
        if category is None:
            raise NotFoundError("category.categoryNotFound")
        return self._detail(db, category)

    def homepage_sections(
        self, db: Session, *, sort_by: str = "newest", limit: int = 8
    ) -> List[HomepageSectionSchema]:
        """
        One section per active leaf category with its active, in-stock
        products. Categories without such products are left out.
        """
        if sort_by not in HOMEPAGE_SORTS:
            sort_by = "newest"
        limit = max(1, min(limit, 20))

        categories = category_controller.list_categories(db)
        parent_ids = {c.parent_id for c in categories if c.parent_id}
        leaves = [c for c in categories if c.id not in parent_ids]

        sections: List[HomepageSectionSchema] = []
        for category in leaves:
            query = product_controller.active_query(db).filter(
                Product.category_id == category.id, Product.in_stock.is_(True)
            )
            if sort_by == "popular":
                query = query.order_by(Product.views.desc(), Product.created_at.desc())
            else:
                query = query.order_by(Product.created_at.desc())

            if sort_by == "random":
                products = query.all()
                random.shuffle(products)
                products = products[:limit]
            else:
                products = query.limit(limit).all()

            if products:
                sections.append(
                    HomepageSectionSchema(
                        category=ProductCategorySchema.model_validate(category),
                        products=[ProductSchema.model_validate(p) for p in products],
                    )
                )
        return sections

    # --- Writes ---

    def create(self, db: Session, data: CategoryCreateSchema) -> Category:
        parent = None
        if data.parent_id:
            parent = category_controller.get(db, data.parent_id)
            if parent is None:
                raise NotFoundError("category.parentNotFound")
        if category_controller.name_exists(db, data.name):
            raise ConflictError("category.nameExists")

        obj_in = data.model_dump(mode="json")
        # A child of an inactive category starts inactive.
        if parent is not None and not parent.is_active:
            obj_in["is_active"] = False

        slug = self._unique_slug(db, data.name)
        category = category_controller.create(db, obj_in=obj_in, slug=slug)
        db.commit()
        db.refresh(category)
        log.info("Category %s created with slug %s", category.id, category.slug)
        return category

    def update(
        self, db: Session, category_id: str, data: CategoryUpdateSchema
    ) -> Category:
        category = self.get_or_404(db, category_id)
        update_data = data.model_dump(mode="json", exclude_unset=True)
        # Turning a category off, directly or by moving it under an inactive
        # parent, switches off its whole subtree.
        is_active = update_data.pop("is_active", None)

        cascade_off = is_active is False
        if "parent_id" in update_data and update_data["parent_id"]:
            self._check_new_parent(db, category.id, update_data["parent_id"])
            new_parent = category_controller.get(db, update_data["parent_id"])
            if not new_parent.is_active:
                cascade_off = True

        if "name" in update_data:
            name = (update_data["name"] or "").strip()
            if not name:
                update_data.pop("name")
            elif name != category.name:
                if category_controller.name_exists(db, name, exclude_id=category.id):
                    raise ConflictError("category.nameExists")
                update_data["name"] = name
                update_data["slug"] = self._unique_slug(
                    db, name, exclude_id=category.id
                )

        category = category_controller.update(db, db_obj=category, obj_in=update_data)
        if cascade_off:
            ids = [category.id] + self.subtree_ids(db, category.id)
            category_controller.set_active_many(db, ids, False)
        elif is_active:
            category.is_active = True
        db.commit()
        db.refresh(category)
        return category

    def deactivate(self, db: Session, category_id: str) -> int:
        """Deactivates the category and all of its descendants."""
        category = self.get_or_404(db, category_id)
        ids = [category.id] + self.subtree_ids(db, category.id)
        updated = category_controller.set_active_many(db, ids, False)
        db.commit()
        log.info("Category %s deactivated with %s descendants", category.id, len(ids) - 1)
        return updated

    def activate(self, db: Session, category_id: str) -> Category:
        """Re-activates only the category itself, descendants are untouched."""
        category = self.get_or_404(db, category_id)
        category.is_active = True
        db.commit()
        db.refresh(category)
        return category

    def delete(self, db: Session, category_id: str) -> None:
        category = self.get_or_404(db, category_id)
        if category_controller.count_children(db, category.id):
            raise ConflictError("category.hasChildren")
        if category_controller.count_products(db, category.id):
            raise ConflictError("category.hasProducts")
        category_attribute_controller.delete_by_category(db, category.id)
        category_controller.remove(db, db_obj=category)
        db.commit()
        log.info("Category %s deleted", category_id)

    # --- Helpers ---

    def _check_new_parent(self, db: Session, category_id: str, parent_id: str) -> None:
        if parent_id == category_id:
            raise ConflictError("category.circularReference")
        if not category_controller.exists(db, parent_id):
            raise NotFoundError("category.parentNotFound")

        # Walk up from the candidate parent; meeting the category means the
        # candidate is one of its descendants.
        seen = set()
        current = parent_id
        while current and current not in seen:
            if current == category_id:
                raise ConflictError("category.circularReference")
            seen.add(current)
            current = category_controller.get_parent_id(db, current)

        if parent_id in self.subtree_ids(db, category_id):
            raise ConflictError("category.circularReference")

    def _unique_slug(
        self, db: Session, name: str, exclude_id: Optional[str] = None
    ) -> str:
        try:
            return unique_slug(
                name,
                lambda slug: category_controller.slug_exists(
                    db, slug, exclude_id=exclude_id
                ),
            )
        except SlugExhaustedError as e:
            log.error("No free category slug for %r", name)
            raise InternalError("category.slugExhausted") from e

    def _detail(self, db: Session, category: Category) -> CategoryDetailSchema:
        detail = CategoryDetailSchema.model_validate(category)
        if category.parent is not None:
            detail.parent = CategoryShortSchema.model_validate(category.parent)
        detail.children = [
            CategoryShortSchema.model_validate(child)
            for child in category_controller.get_children(db, category.id)
        ]
        return detail

    @staticmethod
    def _crumb(category: Category) -> BreadcrumbItemSchema:
        return BreadcrumbItemSchema(
            id=category.id,
            name=category.name,
            name_ar=category.name_ar,
            slug=category.slug,
        )


category_service = CategoryService()
