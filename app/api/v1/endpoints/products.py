# app/api/v1/endpoints/products.py

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi_pagination.ext.sqlalchemy import paginate
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.api.responses import message_response
from app.core import security
from app.core.database import get_db
from app.core.exceptions import ValidationFailedError
from app.models.internal_model import User
from app.pagination.cursor_pagination import (
    HistoryPage,
    HistoryCursorParams,
)
from app.schemas.basic_schemas import MessageResponse
from app.schemas.product_schemas import (
    AttributeFilter,
    AutocompleteResponse,
    CategoryProductsResponse,
    ProductAdminSchema,
    ProductCreateSchema,
    ProductDetailSchema,
    ProductFilters,
    ProductListResponse,
    ProductSchema,
    ProductUpdateSchema,
    StockAdjustSchema,
)
from app.services.catalog_service import catalog_service
from app.services.product_service import product_service

router = APIRouter(prefix="/products")

ATTRIBUTE_PREFIX = "attr."


def parse_attribute_filters(request: Request) -> Dict[str, AttributeFilter]:
    """
    Collects ``attr.<key>=v1,v2``, ``attr.<key>.min`` and ``attr.<key>.max``
    query parameters into one filter per attribute key.
    """
    raw: Dict[str, dict] = {}
    errors: Dict[str, List[str]] = {}
    for name, value in request.query_params.multi_items():
        if not name.startswith(ATTRIBUTE_PREFIX) or value == "":
            continue
        key, _, bound = name[len(ATTRIBUTE_PREFIX):].partition(".")
        if not key:
            continue
        entry = raw.setdefault(key, {"values": []})
        if bound in ("min", "max"):
            try:
                entry[bound] = float(value)
            except ValueError:
                errors.setdefault(name, []).append("Must be a number")
        elif not bound:
            entry["values"].extend(v.strip() for v in value.split(",") if v.strip())

    filters: Dict[str, AttributeFilter] = {}
    for key, entry in raw.items():
        try:
            filters[key] = AttributeFilter(**entry)
        except ValidationError:
            errors.setdefault(f"{ATTRIBUTE_PREFIX}{key}", []).append(
                "min cannot be greater than max"
            )
    if errors:
        raise ValidationFailedError(errors=errors)
    return filters


def product_filters(
    request: Request,
    category: Optional[List[str]] = Query(None),
    include_subcategories: bool = False,
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    in_stock: Optional[bool] = None,
    search: Optional[str] = Query(None, max_length=200),
    page: int = 1,
    limit: int = 20,
    sort: Optional[str] = None,
) -> ProductFilters:
    """
    Dependency building the catalog filters from the query string.
    ``category`` may be repeated or comma separated.
    """
    category_ids: List[str] = []
    for value in category or []:
        category_ids.extend(c.strip() for c in value.split(",") if c.strip())
    return ProductFilters(
        category_ids=category_ids,
        include_subcategories=include_subcategories,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
        search=search,
        attributes=parse_attribute_filters(request),
        page=page,
        limit=limit,
        sort=sort,
    )


@router.get("", response_model=ProductListResponse)
async def list_products(
    filters: ProductFilters = Depends(product_filters),
    db: Session = Depends(get_db),
):
    return catalog_service.list_products(db, filters)


@router.get("/autocomplete", response_model=AutocompleteResponse)
async def autocomplete_products(
    q: Optional[str] = None,
    limit: int = 10,
    category: Optional[str] = None,
    db: Session = Depends(get_db),
):
    suggestions = catalog_service.autocomplete(db, q, limit=limit, category_id=category)
    return AutocompleteResponse(suggestions=suggestions)


@router.get("/featured", response_model=List[ProductSchema])
async def get_featured_products(limit: int = 10, db: Session = Depends(get_db)):
    return catalog_service.featured_products(db, limit)


@router.get("/sponsored", response_model=List[ProductSchema])
async def get_sponsored_products(limit: int = 10, db: Session = Depends(get_db)):
    return catalog_service.sponsored_products(db, limit)


@router.get("/category/{slugs:path}", response_model=CategoryProductsResponse)
async def list_products_by_category_path(
    slugs: str,
    include_subcategories: bool = True,
    filters: ProductFilters = Depends(product_filters),
    db: Session = Depends(get_db),
):
    return catalog_service.list_by_category_path(
        db, slugs.split("/"), filters, include_subcategories=include_subcategories
    )


@router.get("/admin/list", response_model=HistoryPage[ProductAdminSchema])
async def admin_list_products(
    search: Optional[str] = None,
    category_id: Optional[str] = None,
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db),
    params: HistoryCursorParams = Depends(),
    current_admin: User = Depends(security.get_current_admin),
):
    query = product_service.admin_query(
        db, search=search, category_id=category_id, is_active=is_active
    )
    return paginate(db, query, params)


@router.get("/admin/{product_id}", response_model=ProductAdminSchema)
async def admin_get_product(
    product_id: str,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    return product_service.get_or_404(db, product_id)


@router.get("/{id_or_slug}", response_model=ProductDetailSchema)
async def get_product(id_or_slug: str, db: Session = Depends(get_db)):
    return product_service.get_product(db, id_or_slug)


@router.post("", response_model=ProductAdminSchema, status_code=status.HTTP_201_CREATED)
async def create_product(
    data: ProductCreateSchema,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    return product_service.create_product(db, data)


@router.put("/{product_id}", response_model=ProductAdminSchema)
async def update_product(
    product_id: str,
    data: ProductUpdateSchema,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    return product_service.update_product(db, product_id, data)


@router.patch("/{product_id}/stock", response_model=ProductAdminSchema)
async def adjust_product_stock(
    product_id: str,
    data: StockAdjustSchema,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    return product_service.adjust_stock(db, product_id, data.delta)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    product_service.delete_product(db, product_id)
    return message_response(request, "product.productDeleted")
