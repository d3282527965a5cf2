from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.responses import message_response
from app.core import security
from app.core.database import get_db
from app.models.internal_model import User
from app.schemas.basic_schemas import MessageResponse
from app.schemas.category_attribute_schemas import (
    CategoryAttributesSchema,
    CategoryAttributesUpsertSchema,
)
from app.services.category_attribute_service import category_attribute_service

router = APIRouter(prefix="/admin/category-attributes")


@router.get("/{category_id}", response_model=CategoryAttributesSchema)
async def get_category_attributes(
    category_id: str,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    """
    Definitions declared on this category only, without inherited ones.
    """
    return category_attribute_service.raw_definitions(db, category_id)


@router.put("/{category_id}", response_model=CategoryAttributesSchema)
async def upsert_category_attributes(
    category_id: str,
    data: CategoryAttributesUpsertSchema,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    """
    Replaces the whole definition list. Existing product attribute values
    are left as they are.
    """
    return category_attribute_service.upsert(db, category_id, data.attributes)


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category_attributes(
    category_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    category_attribute_service.delete(db, category_id)
    return message_response(request, "categoryAttribute.attributesDeleted")
