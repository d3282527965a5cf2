# app/api/v1/endpoints/categories.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.api.responses import message_response
from app.core import security
from app.core.database import get_db
from app.models.internal_model import User
from app.schemas.basic_schemas import MessageResponse
from app.schemas.category_attribute_schemas import EffectiveFiltersSchema
from app.schemas.category_schemas import (
    BreadcrumbItemSchema,
    CategoryCreateSchema,
    CategoryDetailSchema,
    CategoryPathSchema,
    CategorySchema,
    CategoryTreeNodeSchema,
    CategoryUpdateSchema,
)
from app.schemas.product_schemas import HomepageSectionSchema
from app.services.category_attribute_service import category_attribute_service
from app.services.category_service import category_service

router = APIRouter(prefix="/categories")


@router.get("", response_model=List[CategorySchema])
async def list_categories(
    parent_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Active categories, optionally only the direct children of ``parent_id``.
    """
    return category_service.list_categories(db, parent_id=parent_id)


@router.get("/tree", response_model=List[CategoryTreeNodeSchema])
async def get_category_tree(db: Session = Depends(get_db)):
    return category_service.category_tree(db)


@router.get("/roots", response_model=List[CategorySchema])
async def get_root_categories(db: Session = Depends(get_db)):
    return category_service.root_categories(db)


@router.get("/homepage", response_model=List[HomepageSectionSchema])
async def get_homepage_sections(
    sort_by: str = Query("newest", pattern="^(newest|popular|random)$"),
    limit: int = Query(8, ge=1, le=20),
    db: Session = Depends(get_db),
):
    """
    Leaf categories with their in-stock products, for the storefront home page.
    """
    return category_service.homepage_sections(db, sort_by=sort_by, limit=limit)


@router.get("/slug/{slug}", response_model=CategoryDetailSchema)
async def get_category_by_slug(slug: str, db: Session = Depends(get_db)):
    return category_service.get_by_slug(db, slug)


@router.get("/path/{slugs:path}", response_model=CategoryPathSchema)
async def resolve_category_path(slugs: str, db: Session = Depends(get_db)):
    """
    Resolves a nested path such as ``electronics/laptops`` to its category,
    breadcrumb and active children.
    """
    return category_service.resolve_path(db, slugs.split("/"))


@router.get("/admin/all", response_model=List[CategorySchema])
async def admin_list_categories(
    parent_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    return category_service.list_categories(
        db, parent_id=parent_id, include_inactive=True
    )


@router.get("/admin/tree", response_model=List[CategoryTreeNodeSchema])
async def admin_category_tree(
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    return category_service.category_tree(db, include_inactive=True)


@router.get("/{category_id}", response_model=CategoryDetailSchema)
async def get_category(category_id: str, db: Session = Depends(get_db)):
    return category_service.get_by_id(db, category_id)


@router.get("/{category_id}/breadcrumb", response_model=List[BreadcrumbItemSchema])
async def get_category_breadcrumb(category_id: str, db: Session = Depends(get_db)):
    category_service.get_or_404(db, category_id)
    return category_service.breadcrumb(db, category_id)


@router.get("/{category_id}/filters", response_model=EffectiveFiltersSchema)
async def get_category_filters(category_id: str, db: Session = Depends(get_db)):
    """
    Filterable attributes of the category, including the ones it inherits
    from its ancestors.
    """
    return category_attribute_service.effective_filters(db, category_id)


@router.post("", response_model=CategorySchema, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreateSchema,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    return category_service.create(db, data)


@router.put("/{category_id}", response_model=CategorySchema)
async def update_category(
    category_id: str,
    data: CategoryUpdateSchema,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    return category_service.update(db, category_id, data)


@router.patch("/{category_id}/activate", response_model=CategorySchema)
async def activate_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    return category_service.activate(db, category_id)


@router.patch("/{category_id}/deactivate", response_model=MessageResponse)
async def deactivate_category(
    category_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    updated = category_service.deactivate(db, category_id)
    return message_response(request, "category.categoryDeactivated", {"updated": updated})


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    category_service.delete(db, category_id)
    return message_response(request, "category.categoryDeleted")
