"""Auth domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from ...shared.schemas import CamelModel
from ...shared.validators import validate_phone
from ..users.schemas import UserResponse


class RegisterRequest(CamelModel):
    """Schema for creating an account"""

    email: EmailStr
    name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=4, max_length=128)
    phone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()

    @field_validator("phone")
    @classmethod
    def validate_phone_number(cls, v):
        if v:
            return validate_phone(v)
        return v


class LoginRequest(CamelModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class RefreshRequest(CamelModel):
    refresh_token: str


class RegisterResponse(CamelModel):
    user: UserResponse
    message: str


class LoginResponse(CamelModel):
    user: UserResponse
    access_token: str
    refresh_token: str


class AccessTokenResponse(CamelModel):
    access_token: str
