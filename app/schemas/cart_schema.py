from pydantic import BaseModel, Field
from typing import List, Optional

from app.schemas.product_schemas import ProductSchema


class CartItemAddSchema(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)


class CartItemUpdateSchema(BaseModel):
    quantity: int = Field(..., ge=1)


class ApplyCouponSchema(BaseModel):
    code: str = Field(..., min_length=1)


class CartItemSchema(BaseModel):
    id: str
    product_id: str
    product: Optional[ProductSchema] = None
    quantity: int
    price: float
    total_price: float


class CartSchema(BaseModel):
    id: str
    items: List[CartItemSchema] = []
    coupon: Optional[str] = None
    subtotal: float
    discount: float
    total: float
    item_count: int
