"""Salon catalog schemas - salons, their services and staff"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from ...models_salon import (
    GenderSpecialization,
    SalonTier,
    ServiceCategory,
    StaffRole,
    VerificationStatus,
)
from ...shared.schemas import CamelModel
from ...shared.validators import validate_phone, validate_weekly_hours

# ============================================================================
# SERVICES
# ============================================================================


class ServiceCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    category: ServiceCategory
    gender: GenderSpecialization = GenderSpecialization.UNISEX
    price: float = Field(ge=0)
    discounted_price: Optional[float] = Field(default=None, ge=0)
    duration_minutes: int = Field(gt=0, le=720)
    image: Optional[str] = None
    is_popular: bool = False
    add_ons: Optional[list[str]] = None
    add_on_prices: Optional[dict[str, float]] = None

    @model_validator(mode="after")
    def check_discount(self):
        if self.discounted_price is not None and self.discounted_price >= self.price:
            raise ValueError("Discounted price must be lower than the regular price")
        return self


class ServiceUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[ServiceCategory] = None
    gender: Optional[GenderSpecialization] = None
    price: Optional[float] = Field(default=None, ge=0)
    discounted_price: Optional[float] = Field(default=None, ge=0)
    duration_minutes: Optional[int] = Field(default=None, gt=0, le=720)
    image: Optional[str] = None
    is_active: Optional[bool] = None
    is_popular: Optional[bool] = None
    add_ons: Optional[list[str]] = None
    add_on_prices: Optional[dict[str, float]] = None


class ServiceResponse(CamelModel):
    id: int
    salon_id: int
    name: str
    description: Optional[str] = None
    category: ServiceCategory
    gender: GenderSpecialization
    price: float
    discounted_price: Optional[float] = None
    duration_minutes: int
    image: Optional[str] = None
    is_active: bool
    is_popular: bool
    booking_count: int
    add_ons: Optional[list[str]] = None
    add_on_prices: Optional[dict[str, float]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================================
# STAFF
# ============================================================================


class StaffCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: StaffRole = StaffRole.STYLIST
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    specializations: Optional[list[str]] = None
    years_of_experience: int = Field(default=0, ge=0)
    languages_spoken: Optional[list[str]] = None
    working_hours: Optional[dict] = None
    accepts_bookings: bool = True

    @field_validator("phone")
    @classmethod
    def validate_phone_number(cls, v):
        if v:
            return validate_phone(v)
        return v

    @field_validator("working_hours")
    @classmethod
    def validate_hours(cls, v):
        return validate_weekly_hours(v)


class StaffUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: Optional[StaffRole] = None
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    specializations: Optional[list[str]] = None
    years_of_experience: Optional[int] = Field(default=None, ge=0)
    languages_spoken: Optional[list[str]] = None
    working_hours: Optional[dict] = None
    is_active: Optional[bool] = None
    accepts_bookings: Optional[bool] = None

    @field_validator("phone")
    @classmethod
    def validate_phone_number(cls, v):
        if v:
            return validate_phone(v)
        return v

    @field_validator("working_hours")
    @classmethod
    def validate_hours(cls, v):
        return validate_weekly_hours(v)


class StaffResponse(CamelModel):
    id: int
    salon_id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    role: StaffRole
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    specializations: Optional[list[str]] = None
    years_of_experience: int
    languages_spoken: Optional[list[str]] = None
    working_hours: Optional[dict] = None
    rating: float
    total_reviews: int
    is_active: bool
    accepts_bookings: bool
    completed_bookings: int
    created_at: Optional[datetime] = None


# ============================================================================
# SALONS
# ============================================================================


class SalonCreate(CamelModel):
    """Schema for registering a salon"""

    business_name: str = Field(min_length=2, max_length=255)
    description: Optional[str] = None
    phone: str
    email: Optional[EmailStr] = None
    address: str = Field(min_length=1)
    city: str = Field(min_length=1, max_length=100)
    district: Optional[str] = None
    province: Optional[str] = None
    postal_code: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    gender_specialization: GenderSpecialization = GenderSpecialization.UNISEX
    languages_spoken: Optional[list[str]] = None
    working_hours: Optional[dict] = None
    images: Optional[list[str]] = None
    cover_image: Optional[str] = None
    logo_image: Optional[str] = None
    business_registration_number: Optional[str] = None
    accepts_walk_ins: bool = True
    accepts_online_bookings: bool = True

    @field_validator("phone")
    @classmethod
    def validate_phone_number(cls, v):
        return validate_phone(v)

    @field_validator("working_hours")
    @classmethod
    def validate_hours(cls, v):
        return validate_weekly_hours(v)


class SalonUpdate(CamelModel):
    business_name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    description: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    province: Optional[str] = None
    postal_code: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    gender_specialization: Optional[GenderSpecialization] = None
    languages_spoken: Optional[list[str]] = None
    working_hours: Optional[dict] = None
    images: Optional[list[str]] = None
    cover_image: Optional[str] = None
    logo_image: Optional[str] = None
    business_registration_number: Optional[str] = None
    accepts_walk_ins: Optional[bool] = None
    accepts_online_bookings: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator("phone")
    @classmethod
    def validate_phone_number(cls, v):
        if v:
            return validate_phone(v)
        return v

    @field_validator("working_hours")
    @classmethod
    def validate_hours(cls, v):
        return validate_weekly_hours(v)


class VerificationUpdate(CamelModel):
    status: VerificationStatus
    notes: Optional[str] = None


class SalonResponse(CamelModel):
    id: int
    owner_id: int
    business_name: str
    slug: str
    description: Optional[str] = None
    phone: str
    email: Optional[str] = None
    address: str
    city: str
    district: Optional[str] = None
    province: Optional[str] = None
    postal_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    gender_specialization: GenderSpecialization
    languages_spoken: Optional[list[str]] = None
    working_hours: Optional[dict] = None
    images: Optional[list[str]] = None
    cover_image: Optional[str] = None
    logo_image: Optional[str] = None
    subscription_tier: SalonTier
    subscription_start_date: Optional[datetime] = None
    subscription_end_date: Optional[datetime] = None
    verification_status: VerificationStatus
    verification_notes: Optional[str] = None
    average_rating: float
    total_reviews: int
    accepts_walk_ins: bool
    accepts_online_bookings: bool
    featured_listing_credits: int
    is_active: bool
    view_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SalonDetailResponse(SalonResponse):
    services: list[ServiceResponse] = []
    staff: list[StaffResponse] = []


class NearbySalonResponse(SalonResponse):
    distance_km: float
