from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.order_models import OrderStatus, PaymentMethod, PaymentStatus


class PlaceOrderRequest(BaseModel):
    address_id: str
    payment_method: PaymentMethod = PaymentMethod.COD
    notes: Optional[str] = Field(None, max_length=500)


class OrderStatusUpdateRequest(BaseModel):
    status: OrderStatus


class PaymentStatusUpdateRequest(BaseModel):
    payment_status: PaymentStatus


class CheckoutItemSchema(BaseModel):
    product_id: str
    name: str
    name_ar: Optional[str] = None
    image: Optional[str] = None
    quantity: int
    price: float
    total_price: float


class CheckoutSummarySchema(BaseModel):
    items: List[CheckoutItemSchema] = []
    subtotal: float
    shipping_cost: float
    discount: float
    total: float
    item_count: int


class ShippingAddressSnapshot(BaseModel):
    name: str
    phone: str
    city: str
    area: str
    street: str
    landmark: Optional[str] = None
    apartment_number: Optional[str] = None


class OrderItemSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: Optional[str] = None
    product_name: str
    product_name_ar: Optional[str] = None
    product_image: Optional[str] = None
    quantity: int
    price: float
    total_price: float


class OrderSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    user_id: str
    items: List[OrderItemSchema]
    shipping_address: ShippingAddressSnapshot
    payment_method: str
    payment_status: str
    status: str
    subtotal: float
    shipping_cost: float
    discount: float
    total: float
    coupon: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
