from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.api.responses import message_response
from app.core import security
from app.core.database import get_db
from app.models.internal_model import User
from app.schemas.address_schema import (
    AddressCreateSchema,
    AddressSchema,
    AddressUpdateSchema,
)
from app.schemas.basic_schemas import MessageResponse
from app.services.address_service import address_service

router = APIRouter(prefix="/addresses")


@router.get("", response_model=List[AddressSchema])
async def list_addresses(
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return address_service.list_addresses(db, current_user.id)


@router.post("", response_model=AddressSchema, status_code=status.HTTP_201_CREATED)
async def create_address(
    data: AddressCreateSchema,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return address_service.create(db, current_user.id, data)


@router.get("/{address_id}", response_model=AddressSchema)
async def get_address(
    address_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return address_service.get_address(db, current_user.id, address_id)


@router.put("/{address_id}", response_model=AddressSchema)
async def update_address(
    address_id: str,
    data: AddressUpdateSchema,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return address_service.update(db, current_user.id, address_id, data)


@router.patch("/{address_id}/default", response_model=AddressSchema)
async def set_default_address(
    address_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return address_service.set_default(db, current_user.id, address_id)


@router.delete("/{address_id}", response_model=MessageResponse)
async def delete_address(
    address_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    address_service.delete(db, current_user.id, address_id)
    return message_response(request, "address.addressDeleted")
