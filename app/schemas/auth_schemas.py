import re
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

PHONE_PATTERN = re.compile(r"^\+?\d{8,15}$")


def normalize_phone(phone: str) -> str:
    """Keeps digits and a leading plus sign only."""
    phone = phone.strip()
    digits = re.sub(r"\D", "", phone)
    return f"+{digits}" if phone.startswith("+") else digits


class RegisterRequest(BaseModel):
    phone_number: str
    password: str = Field(..., min_length=8, max_length=72)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: Optional[EmailStr] = None

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, value: str) -> str:
        value = normalize_phone(value)
        if not PHONE_PATTERN.match(value):
            raise ValueError("Invalid phone number")
        return value


class LoginRequest(BaseModel):
    phone_number: str
    password: str

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, value: str) -> str:
        return normalize_phone(value)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
