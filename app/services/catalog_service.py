# app/services/catalog_service.py

import logging
import re
from typing import List, Optional, Tuple

from sqlalchemy import Float, and_, case, cast, exists, func, literal, or_, select
from sqlalchemy.dialects.postgresql import JSONB, array
from sqlalchemy.orm import Query, Session, joinedload

from app.core.config import settings
from app.core.database import is_postgres, statement_timeout
from app.models.product_models import SEARCH_CONFIG, Product, search_vector
from app.pagination.page_pagination import clamp_page
from app.schemas.product_schemas import (
    AttributeFilter,
    AutocompleteSuggestionSchema,
    CategoryProductsResponse,
    ProductCategorySchema,
    ProductFilters,
    ProductListResponse,
    ProductSchema,
)
from app.services.category_service import category_service

log = logging.getLogger(__name__)

# Terms shorter than this are matched as substrings, longer ones go through
# full text search.
FULL_TEXT_MIN_LENGTH = 3
SEARCH_STRIP_PATTERN = re.compile(r"[{}()\[\]$]")
NUMERIC_PATTERN = r"^-?[0-9]+(\.[0-9]+)?$"
ATTRIBUTE_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
AUTOCOMPLETE_MAX_LIMIT = 10
AUTOCOMPLETE_MAX_QUERY_LENGTH = 100
SORTS = ("newest", "price-low", "price-high", "featured", "relevance")


def sanitize_search(term: Optional[str]) -> str:
    if not term:
        return ""
    return SEARCH_STRIP_PATTERN.sub("", term.strip()).strip()


class CatalogService:
    """
    Read side of the product catalog: filtered, sorted and paginated
    listings, listings by category path, and autocomplete.
    """

    def list_products(self, db: Session, filters: ProductFilters) -> ProductListResponse:
        window = clamp_page(filters.page, filters.limit)
        query = db.query(Product).filter(Product.is_active.is_(True))
        query = self._apply_category(db, query, filters)
        query = self._apply_price_and_stock(query, filters)
        query, rank = self._apply_search(db, query, filters.search)
        query = self._apply_attributes(db, query, filters.attributes)

        with statement_timeout(db, settings.QUERY_TIMEOUT_MS):
            total = query.order_by(None).count()
            items = (
                self._apply_sort(query, filters.sort, rank)
                .options(joinedload(Product.category))
                .offset(window.offset)
                .limit(window.limit)
                .all()
            )

        return ProductListResponse(
            items=[ProductSchema.model_validate(item) for item in items],
            pagination=window.describe(total),
        )

    def list_by_category_path(
        self,
        db: Session,
        slugs: List[str],
        filters: ProductFilters,
        include_subcategories: bool = True,
    ) -> CategoryProductsResponse:
        path = category_service.resolve_path(db, slugs)
        filters.category_ids = [path.category.id]
        filters.include_subcategories = include_subcategories
        listing = self.list_products(db, filters)
        return CategoryProductsResponse(
            **path.model_dump(), items=listing.items, pagination=listing.pagination
        )

    def autocomplete(
        self,
        db: Session,
        query: Optional[str],
        limit: int = AUTOCOMPLETE_MAX_LIMIT,
        category_id: Optional[str] = None,
    ) -> List[AutocompleteSuggestionSchema]:
        """
        Name suggestions over active, in-stock products. Never raises:
        any failure is logged and answered with no suggestions.
        """
        term = sanitize_search((query or "")[:AUTOCOMPLETE_MAX_QUERY_LENGTH])
        if not term:
            return []
        limit = max(1, min(limit or AUTOCOMPLETE_MAX_LIMIT, AUTOCOMPLETE_MAX_LIMIT))

        try:
            statement = (
                db.query(Product)
                .options(joinedload(Product.category))
                .filter(
                    Product.is_active.is_(True),
                    Product.in_stock.is_(True),
                    Product.name.icontains(term, autoescape=True),
                )
            )
            if category_id:
                statement = statement.filter(Product.category_id == category_id)
            with statement_timeout(db, settings.AUTOCOMPLETE_TIMEOUT_MS):
                products = (
                    statement.order_by(Product.is_featured.desc(), Product.views.desc())
                    .limit(limit)
                    .all()
                )
        except Exception:
            log.exception("Autocomplete failed for %r", term)
            db.rollback()
            return []

        return [
            AutocompleteSuggestionSchema(
                id=product.id,
                name=product.name,
                name_ar=product.name_ar,
                slug=product.slug,
                price=product.price,
                image=product.images[0] if product.images else None,
                category=(
                    ProductCategorySchema.model_validate(product.category)
                    if product.category
                    else None
                ),
            )
            for product in products
        ]

    def featured_products(self, db: Session, limit: int = 10) -> List[ProductSchema]:
        return self._flagged(db, Product.is_featured, limit)

    def sponsored_products(self, db: Session, limit: int = 10) -> List[ProductSchema]:
        return self._flagged(db, Product.is_sponsored, limit)

    # --- Query building ---

    def _flagged(self, db: Session, flag, limit: int) -> List[ProductSchema]:
        limit = max(1, min(limit, 50))
        products = (
            db.query(Product)
            .options(joinedload(Product.category))
            .filter(Product.is_active.is_(True), flag.is_(True))
            .order_by(Product.created_at.desc())
            .limit(limit)
            .all()
        )
        return [ProductSchema.model_validate(p) for p in products]

    def _apply_category(self, db: Session, query: Query, filters: ProductFilters) -> Query:
        category_ids = [c for c in filters.category_ids if c]
        if not category_ids:
            return query
        if filters.include_subcategories:
            expanded = list(category_ids)
            for category_id in category_ids:
                expanded.extend(category_service.subtree_ids(db, category_id))
            category_ids = list(dict.fromkeys(expanded))
        return query.filter(Product.category_id.in_(category_ids))

    @staticmethod
    def _apply_price_and_stock(query: Query, filters: ProductFilters) -> Query:
        if filters.min_price is not None:
            query = query.filter(Product.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.filter(Product.price <= filters.max_price)
        if filters.in_stock is not None:
            query = query.filter(Product.in_stock.is_(filters.in_stock))
        return query

    def _apply_search(
        self, db: Session, query: Query, search: Optional[str]
    ) -> Tuple[Query, Optional[object]]:
        """
        Returns the filtered query and, for full text searches, the rank
        expression used by the ``relevance`` sort.
        """
        term = sanitize_search(search)
        if not term:
            return query, None

        if len(term) < FULL_TEXT_MIN_LENGTH:
            return (
                query.filter(
                    or_(
                        Product.name.icontains(term, autoescape=True),
                        Product.description.icontains(term, autoescape=True),
                    )
                ),
                None,
            )

        if is_postgres(db):
            ts_query = func.plainto_tsquery(SEARCH_CONFIG, term)
            query = query.filter(search_vector().op("@@")(ts_query))
            return query, func.ts_rank(search_vector(), ts_query)

        # Without tsvector support, rank by the number of matched tokens
        tokens = list(dict.fromkeys(token.lower() for token in term.split()))
        hits = [
            or_(
                Product.name.icontains(token, autoescape=True),
                Product.description.icontains(token, autoescape=True),
            )
            for token in tokens
        ]
        rank = sum(
            (case((hit, 1), else_=0) for hit in hits[1:]),
            case((hits[0], 1), else_=0),
        )
        return query.filter(or_(*hits)), rank

    def _apply_attributes(self, db: Session, query: Query, attributes) -> Query:
        for key, attribute_filter in (attributes or {}).items():
            if not ATTRIBUTE_KEY_PATTERN.match(key):
                log.debug("Ignoring attribute filter on invalid key %r", key)
                continue
            condition = self._attribute_condition(db, key, attribute_filter)
            if condition is not None:
                query = query.filter(condition)
        return query

    @staticmethod
    def _numeric_attribute(db: Session, key: str):
        """``attributes[key]`` as a number, NULL when it is not numeric."""
        value = Product.attributes[key]
        if is_postgres(db):
            is_numeric = value.as_string().op("~")(NUMERIC_PATTERN)
        else:
            is_numeric = func.json_type(Product.attributes, f"$.{key}").in_(
                ("integer", "real")
            )
        return case((is_numeric, cast(value.as_string(), Float)), else_=literal(None))

    @staticmethod
    def _list_attribute_contains(db: Session, key: str, values: List[str]):
        """True when ``attributes[key]`` is a list holding one of ``values``."""
        if is_postgres(db):
            element = cast(Product.attributes, JSONB)[key]
            return and_(
                func.jsonb_typeof(element) == "array",
                element.has_any(array(values)),
            )
        elements = func.json_each(Product.attributes, f"$.{key}").table_valued(
            "value", "type"
        )
        return and_(
            func.json_type(Product.attributes, f"$.{key}") == "array",
            exists(
                select(literal(1))
                .select_from(elements)
                .where(elements.c.type == "text", elements.c.value.in_(values))
            ),
        )

    def _attribute_condition(self, db: Session, key: str, attribute_filter: AttributeFilter):
        conditions = []
        if attribute_filter.values:
            text_value = Product.attributes[key].as_string()
            matches = [
                text_value.in_(attribute_filter.values),
                self._list_attribute_contains(db, key, attribute_filter.values),
            ]
            numbers = [_to_number(v) for v in attribute_filter.values]
            numbers = [n for n in numbers if n is not None]
            if numbers:
                matches.append(self._numeric_attribute(db, key).in_(numbers))
            conditions.append(or_(*matches))
        if attribute_filter.min is not None:
            conditions.append(self._numeric_attribute(db, key) >= attribute_filter.min)
        if attribute_filter.max is not None:
            conditions.append(self._numeric_attribute(db, key) <= attribute_filter.max)
        if not conditions:
            return None
        return and_(*conditions)

    @staticmethod
    def _apply_sort(query: Query, sort: Optional[str], rank) -> Query:
        if sort not in SORTS:
            sort = "relevance" if rank is not None else "newest"
        if sort == "relevance" and rank is not None:
            return query.order_by(rank.desc(), Product.created_at.desc())
        if sort == "price-low":
            return query.order_by(Product.price.asc(), Product.created_at.desc())
        if sort == "price-high":
            return query.order_by(Product.price.desc(), Product.created_at.desc())
        if sort == "featured":
            return query.order_by(Product.is_featured.desc(), Product.created_at.desc())
        return query.order_by(Product.created_at.desc())


def _to_number(value: str) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


catalog_service = CatalogService()
