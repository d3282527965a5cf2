# app/services/product_service.py

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Query, Session, joinedload

from app.controllers.category_controller import category_controller
from app.controllers.product_controller import product_controller
from app.core.exceptions import (
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationFailedError,
)
from app.models.product_models import Product
from app.schemas.product_schemas import (
    ProductCreateSchema,
    ProductDetailSchema,
    ProductSchema,
    ProductUpdateSchema,
)
from app.utils.slug import SlugExhaustedError, unique_slug

log = logging.getLogger(__name__)

RELATED_PRODUCTS_LIMIT = 4


class ProductService:
    """
    Single product reads for customers and the admin write side of the
    catalog.
    """

    def get_product(self, db: Session, id_or_slug: str) -> ProductDetailSchema:
        """
        Active product by id or slug with up to four related products from
        the same category. Every read counts as a view.
        """
        product = product_controller.get_active(db, id_or_slug)
        if product is None:
            product = product_controller.get_active_by_slug(db, id_or_slug)
        if product is None:
            raise NotFoundError("product.productNotFound")

        product_controller.increment_views(db, product.id)
        db.commit()
        db.refresh(product)

        related = product_controller.get_related(
            db, product=product, limit=RELATED_PRODUCTS_LIMIT
        )
        detail = ProductDetailSchema.model_validate(product)
        detail.related_products = [ProductSchema.model_validate(p) for p in related]
        return detail

    # --- Admin ---

    def get_or_404(self, db: Session, product_id: str) -> Product:
        product = product_controller.get(db, product_id)
        if product is None:
            raise NotFoundError("product.productNotFound")
        return product

    def admin_query(
        self,
        db: Session,
        *,
        search: Optional[str] = None,
        category_id: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Query:
        query = db.query(Product).options(joinedload(Product.category))
        if search:
            query = query.filter(Product.name.icontains(search.strip(), autoescape=True))
        if category_id:
            query = query.filter(Product.category_id == category_id)
        if is_active is not None:
            query = query.filter(Product.is_active.is_(is_active))
        return product_controller.get_cursor_query(db, query)

    def create_product(self, db: Session, data: ProductCreateSchema) -> Product:
        values = data.model_dump(mode="json")
        self._check_category(db, values["category_id"])
        self._check_compare_at_price(values["price"], values.get("compare_at_price"))
        values["sku"] = self._normalize_sku(db, values.get("sku"))
        values["slug"] = self._unique_slug(db, values["name"])
        values["in_stock"] = values["stock_quantity"] > 0

        product = product_controller.create(db, obj_in=values)
        db.commit()
        db.refresh(product)
        log.info("Product %s created in category %s", product.id, product.category_id)
        return product

    def update_product(
        self, db: Session, product_id: str, data: ProductUpdateSchema
    ) -> Product:
        product = self.get_or_404(db, product_id)
        values: Dict[str, Any] = {
            key: value
            for key, value in data.model_dump(mode="json", exclude_unset=True).items()
            if value is not None or key in ("compare_at_price", "sku", "name_ar")
        }

        if "category_id" in values and values["category_id"] != product.category_id:
            self._check_category(db, values["category_id"])

        price = values.get("price", product.price)
        compare_at_price = values.get("compare_at_price", product.compare_at_price)
        if "price" in values or "compare_at_price" in values:
            self._check_compare_at_price(price, compare_at_price)

        if "sku" in values:
            values["sku"] = self._normalize_sku(db, values["sku"], exclude_id=product.id)

        if "name" in values and values["name"] != product.name:
            values["slug"] = self._unique_slug(db, values["name"], exclude_id=product.id)

        if "stock_quantity" in values:
            values["in_stock"] = values["stock_quantity"] > 0

        product = product_controller.update(db, db_obj=product, obj_in=values)
        db.commit()
        db.refresh(product)
        return product

    def delete_product(self, db: Session, product_id: str) -> None:
        product = self.get_or_404(db, product_id)
        product_controller.detach(db, product.id)
        product_controller.remove(db, db_obj=product)
        db.commit()
        log.info("Product %s deleted", product_id)

    def adjust_stock(self, db: Session, product_id: str, delta: int) -> Product:
        """
        Adds ``delta`` to the stock in one statement; a change that would
        leave the quantity negative is refused.
        """
        product = self.get_or_404(db, product_id)
        if not product_controller.change_stock(db, product.id, delta):
            db.rollback()
            raise ConflictError("product.insufficientStock")
        db.commit()
        db.refresh(product)
        return product

    # --- Helpers ---

    @staticmethod
    def _check_category(db: Session, category_id: str) -> None:
        if not category_controller.exists(db, category_id):
            raise NotFoundError("category.categoryNotFound")

    @staticmethod
    def _check_compare_at_price(price, compare_at_price) -> None:
        if compare_at_price is not None and float(compare_at_price) < float(price):
            raise ValidationFailedError(
                "product.invalidCompareAtPrice",
                errors={"compare_at_price": ["product.invalidCompareAtPrice"]},
            )

    @staticmethod
    def _normalize_sku(
        db: Session, sku: Optional[str], exclude_id: Optional[str] = None
    ) -> Optional[str]:
        if not sku or not sku.strip():
            return None
        sku = sku.strip().upper()
        if product_controller.sku_exists(db, sku, exclude_id=exclude_id):
            raise ConflictError("product.skuExists")
        return sku

    @staticmethod
    def _unique_slug(db: Session, name: str, exclude_id: Optional[str] = None) -> str:
        try:
            return unique_slug(
                name,
                lambda slug: product_controller.slug_exists(
                    db, slug, exclude_id=exclude_id
                ),
            )
        except SlugExhaustedError as e:
            log.error("No free product slug for %r", name)
            raise InternalError("product.slugExhausted") from e


product_service = ProductService()
