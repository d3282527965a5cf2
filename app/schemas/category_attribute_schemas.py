from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

AttributeType = Literal["select", "multi-select", "number-range"]


class AttributeOptionSchema(BaseModel):
    value: str = Field(..., min_length=1)
    label: Optional[str] = None
    label_ar: Optional[str] = None


class AttributeDefinitionSchema(BaseModel):
    key: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1)
    label_ar: Optional[str] = None
    type: AttributeType
    options: List[AttributeOptionSchema] = []
    unit: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None
    filterable: bool = True
    required: bool = False
    order: int = 0

    @field_validator("key", mode="before")
    @classmethod
    def normalize_key(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
        return value

    @field_validator("key")
    @classmethod
    def check_key(cls, value: str) -> str:
        if not value.replace("_", "").isalnum() or not value.isascii():
            raise ValueError("Attribute key must be alphanumeric and underscores only")
        return value

    @model_validator(mode="after")
    def check_bounds(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("min cannot be greater than max")
        return self


class CategoryAttributesUpsertSchema(BaseModel):
    attributes: List[AttributeDefinitionSchema] = []


class CategoryAttributesSchema(BaseModel):
    category_id: str
    attributes: List[AttributeDefinitionSchema] = []


class EffectiveFiltersSchema(BaseModel):
    category_id: str
    filters: List[AttributeDefinitionSchema] = []
