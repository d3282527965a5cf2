from pydantic import BaseModel, ConfigDict
from typing import Optional
from pydantic.types import NaiveDatetime

from app.schemas.auth_schemas import Token


class UserProfileSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    phone_number: str
    email: Optional[str] = None
    first_name: str
    last_name: str
    role: str
    is_active: bool
    created_at: Optional[NaiveDatetime] = None
    updated_at: Optional[NaiveDatetime] = None


class AuthResponseSchema(Token):
    user: UserProfileSchema


class UserRoleUpdateSchema(BaseModel):
    role: Optional[str] = None
    is_active: Optional[bool] = None
