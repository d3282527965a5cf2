from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class AddressCreateSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1, max_length=100)
    area: str = Field(..., min_length=1, max_length=100)
    street: str = Field(..., min_length=1, max_length=255)
    landmark: Optional[str] = Field(None, max_length=255)
    apartment_number: Optional[str] = Field(None, max_length=20)
    is_default: bool = False


class AddressUpdateSchema(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    area: Optional[str] = Field(None, max_length=100)
    street: Optional[str] = Field(None, max_length=255)
    landmark: Optional[str] = Field(None, max_length=255)
    apartment_number: Optional[str] = Field(None, max_length=20)
    is_default: Optional[bool] = None


class AddressSchema(AddressCreateSchema):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
