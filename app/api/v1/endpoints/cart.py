from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.responses import message_response
from app.core import security
from app.core.database import get_db
from app.models.internal_model import User
from app.schemas.basic_schemas import MessageResponse
from app.schemas.cart_schema import (
    ApplyCouponSchema,
    CartItemAddSchema,
    CartItemUpdateSchema,
    CartSchema,
)
from app.services.cart_service import cart_service

router = APIRouter(prefix="/cart")


@router.get("", response_model=CartSchema)
async def get_cart(
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return cart_service.get_cart(db, current_user.id)


@router.post("/items", response_model=CartSchema)
async def add_cart_item(
    data: CartItemAddSchema,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return cart_service.add_item(db, current_user.id, data.product_id, data.quantity)


@router.put("/items/{item_id}", response_model=CartSchema)
async def update_cart_item(
    item_id: str,
    data: CartItemUpdateSchema,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return cart_service.update_item(db, current_user.id, item_id, data.quantity)


@router.delete("/items/{item_id}", response_model=CartSchema)
async def remove_cart_item(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return cart_service.remove_item(db, current_user.id, item_id)


@router.delete("", response_model=MessageResponse)
async def clear_cart(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    cart_service.clear(db, current_user.id)
    return message_response(request, "cart.cartCleared")


@router.post("/coupon", response_model=CartSchema)
async def apply_coupon(
    data: ApplyCouponSchema,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return cart_service.apply_coupon(db, current_user.id, data.code)


@router.delete("/coupon", response_model=CartSchema)
async def remove_coupon(
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return cart_service.remove_coupon(db, current_user.id)
