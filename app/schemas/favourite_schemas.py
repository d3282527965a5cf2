from typing import List

from pydantic import BaseModel

from app.schemas.product_schemas import ProductSchema


class FavouritesSchema(BaseModel):
    products: List[ProductSchema] = []
    count: int = 0


class FavouriteStatusSchema(BaseModel):
    product_id: str
    is_favourite: bool


class FavouriteCountSchema(BaseModel):
    count: int
