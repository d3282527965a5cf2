# app/api/v1/endpoints/orders.py

from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from app.core import security
from app.core.database import get_db
from app.models.internal_model import User
from app.models.order_models import OrderStatus
from app.pagination.cursor_pagination import (
    HistoryPage,
    HistoryCursorParams,
)
from app.schemas.order_schemas import (
    CheckoutSummarySchema,
    OrderSchema,
    OrderStatusUpdateRequest,
    PaymentStatusUpdateRequest,
    PlaceOrderRequest,
)
from app.services.order_service import order_service

router = APIRouter(prefix="/orders")


@router.get("/checkout-summary", response_model=CheckoutSummarySchema)
async def get_checkout_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return order_service.checkout_summary(db, current_user.id)


@router.post("", response_model=OrderSchema, status_code=status.HTTP_201_CREATED)
async def place_order(
    data: PlaceOrderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return order_service.place_order(db, current_user.id, data)


@router.get("", response_model=HistoryPage[OrderSchema])
async def list_orders(
    db: Session = Depends(get_db),
    params: HistoryCursorParams = Depends(),
    current_user: User = Depends(security.get_current_user),
):
    """
    Order history of the current user, newest first.
    """
    query = order_service.orders_query(db, current_user.id)
    return paginate(db, query, params)


@router.get("/admin/all", response_model=HistoryPage[OrderSchema])
async def admin_list_orders(
    order_status: Optional[OrderStatus] = None,
    db: Session = Depends(get_db),
    params: HistoryCursorParams = Depends(),
    current_admin: User = Depends(security.get_current_admin),
):
    query = order_service.admin_query(
        db, status=order_status.value if order_status else None
    )
    return paginate(db, query, params)


@router.get("/admin/{order_id}", response_model=OrderSchema)
async def admin_get_order(
    order_id: str,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    return order_service.admin_get(db, order_id)


@router.patch("/admin/{order_id}/status", response_model=OrderSchema)
async def update_order_status(
    order_id: str,
    data: OrderStatusUpdateRequest,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    return order_service.update_status(db, order_id, data.status)


@router.patch("/admin/{order_id}/payment-status", response_model=OrderSchema)
async def update_payment_status(
    order_id: str,
    data: PaymentStatusUpdateRequest,
    db: Session = Depends(get_db),
    current_admin: User = Depends(security.get_current_admin),
):
    return order_service.update_payment_status(db, order_id, data.payment_status)


@router.get("/{order_id}", response_model=OrderSchema)
async def get_order(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return order_service.get_order(db, current_user.id, order_id)


@router.post("/{order_id}/cancel", response_model=OrderSchema)
async def cancel_order(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(security.get_current_user),
):
    return order_service.cancel_order(db, current_user.id, order_id)
