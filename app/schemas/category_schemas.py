from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator


class CategoryCreateSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    name_ar: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    description_ar: Optional[str] = Field(None, max_length=500)
    image: Optional[HttpUrl] = None
    parent_id: Optional[str] = None
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name is required")
        return value


class CategoryUpdateSchema(BaseModel):
    """
    Every field is optional. ``parent_id`` explicitly set to null moves the
    category to the root level; leaving it out keeps the current parent.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    name_ar: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    description_ar: Optional[str] = Field(None, max_length=500)
    image: Optional[HttpUrl] = None
    parent_id: Optional[str] = None
    is_active: Optional[bool] = None


class CategoryShortSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    name_ar: Optional[str] = None
    slug: str
    description: Optional[str] = None
    description_ar: Optional[str] = None
    image: Optional[str] = None


class CategorySchema(CategoryShortSchema):
    parent_id: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CategoryDetailSchema(CategorySchema):
    parent: Optional[CategoryShortSchema] = None
    children: List[CategoryShortSchema] = []


class CategoryTreeNodeSchema(CategorySchema):
    children: List["CategoryTreeNodeSchema"] = []


class BreadcrumbItemSchema(BaseModel):
    id: str
    name: str
    name_ar: Optional[str] = None
    slug: str


class CategoryPathSchema(BaseModel):
    category: CategorySchema
    children: List[CategoryShortSchema]
    breadcrumb: List[BreadcrumbItemSchema]
    is_leaf: bool
    has_products: bool
