from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, model_validator

from app.schemas.basic_schemas import PaginationSchema
from app.schemas.category_schemas import CategoryPathSchema

ProductSort = Literal["newest", "price-low", "price-high", "featured", "relevance"]


class ProductCreateSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    name_ar: Optional[str] = Field(None, max_length=200)
    description: str = Field(..., max_length=2000)
    description_ar: Optional[str] = Field(None, max_length=2000)
    price: float = Field(..., ge=0)
    compare_at_price: Optional[float] = Field(None, ge=0)
    category_id: str
    images: List[HttpUrl] = []
    stock_quantity: int = Field(0, ge=0)
    sku: Optional[str] = None
    supplier_name: Optional[str] = None
    supplier_contact: Optional[str] = None
    supplier_notes: Optional[str] = None
    supplier_price: Optional[float] = Field(None, ge=0)
    is_active: bool = True
    is_featured: bool = False
    is_sponsored: bool = False
    attributes: Dict[str, Any] = {}


class ProductUpdateSchema(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    name_ar: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    description_ar: Optional[str] = Field(None, max_length=2000)
    price: Optional[float] = Field(None, ge=0)
    compare_at_price: Optional[float] = Field(None, ge=0)
    category_id: Optional[str] = None
    images: Optional[List[HttpUrl]] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    sku: Optional[str] = None
    supplier_name: Optional[str] = None
    supplier_contact: Optional[str] = None
    supplier_notes: Optional[str] = None
    supplier_price: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_sponsored: Optional[bool] = None
    attributes: Optional[Dict[str, Any]] = None


class StockAdjustSchema(BaseModel):
    delta: int


class ProductCategorySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    name_ar: Optional[str] = None
    slug: str
    image: Optional[str] = None


class ProductSchema(BaseModel):
    """
    customer facing product, supplier data is never included
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    name_ar: Optional[str] = None
    description: str
    description_ar: Optional[str] = None
    slug: str
    price: float
    compare_at_price: Optional[float] = None
    discount_percentage: int = 0
    category_id: str
    category: Optional[ProductCategorySchema] = None
    images: List[str] = []
    in_stock: bool
    stock_quantity: int
    sku: Optional[str] = None
    is_featured: bool
    is_sponsored: bool
    views: int
    attributes: Dict[str, Any] = {}
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductAdminSchema(ProductSchema):
    is_active: bool
    supplier_name: Optional[str] = None
    supplier_contact: Optional[str] = None
    supplier_notes: Optional[str] = None
    supplier_price: Optional[float] = None
    profit_margin: float = 0


class ProductDetailSchema(ProductSchema):
    related_products: List[ProductSchema] = []


class ProductListResponse(BaseModel):
    items: List[ProductSchema]
    pagination: PaginationSchema


class AutocompleteSuggestionSchema(BaseModel):
    id: str
    name: str
    name_ar: Optional[str] = None
    slug: str
    price: float
    image: Optional[str] = None
    category: Optional[ProductCategorySchema] = None


class AutocompleteResponse(BaseModel):
    suggestions: List[AutocompleteSuggestionSchema] = []


class HomepageSectionSchema(BaseModel):
    category: ProductCategorySchema
    products: List[ProductSchema]


class AttributeFilter(BaseModel):
    """
    Filter on one key of ``Product.attributes``: ``values`` matches any of
    the given values (or any element of a multi-select list), ``min``/``max``
    bound a numeric value.
    """

    values: List[str] = []
    min: Optional[float] = None
    max: Optional[float] = None

    @model_validator(mode="after")
    def check_bounds(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("min cannot be greater than max")
        return self


@dataclass
class ProductFilters:
    category_ids: List[str] = field(default_factory=list)
    include_subcategories: bool = False
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    in_stock: Optional[bool] = None
    search: Optional[str] = None
    attributes: Dict[str, AttributeFilter] = field(default_factory=dict)
    page: int = 1
    limit: int = 20
    sort: Optional[str] = None


class CategoryProductsResponse(CategoryPathSchema):
    items: List[ProductSchema]
    pagination: PaginationSchema
