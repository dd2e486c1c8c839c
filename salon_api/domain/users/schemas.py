"""User domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import field_validator

from ...models import CustomerTier, Gender, UserRole
from ...shared.schemas import CamelModel
from ...shared.validators import validate_phone


class UserResponse(CamelModel):
    """Public view of a user - never includes the password hash"""

    id: int
    email: str
    name: str
    role: UserRole
    phone: Optional[str] = None
    gender: Optional[Gender] = None
    profile_image: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    city: Optional[str] = None
    preferred_language: str = "en"
    is_active: bool
    is_email_verified: bool
    is_phone_verified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdate(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[Gender] = None
    profile_image: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    city: Optional[str] = None
    preferred_language: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def validate_phone_number(cls, v):
        if v:
            return validate_phone(v)
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip() if v else v


class CustomerProfileResponse(CamelModel):
    id: int
    user_id: int
    subscription_tier: CustomerTier
    try_on_credits: int
    weekly_try_ons_used: int
    weekly_reset_date: Optional[datetime] = None
    subscription_start_date: Optional[datetime] = None
    subscription_end_date: Optional[datetime] = None
    auto_renew: bool
    preferences: Optional[dict] = None
    remaining_try_ons: int = 0
    remaining_weekly_try_ons: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CustomerProfileUpdate(CamelModel):
    preferences: Optional[dict] = None
    auto_renew: Optional[bool] = None
