"""Review domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ...shared.schemas import CamelModel
from ...shared.validators import validate_rating
from ...utils.sanitization import validate_and_sanitize_input


class DetailedRatings(CamelModel):
    service: Optional[int] = None
    cleanliness: Optional[int] = None
    value: Optional[int] = None
    staff: Optional[int] = None

    @field_validator("service", "cleanliness", "value", "staff")
    @classmethod
    def check_rating(cls, v):
        return validate_rating(v)


class ReviewCreate(CamelModel):
    salon_id: int
    booking_id: Optional[int] = None
    staff_id: Optional[int] = None
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None
    images: Optional[list[str]] = None
    detailed_ratings: Optional[DetailedRatings] = None

    @field_validator("comment")
    @classmethod
    def sanitize_comment(cls, v):
        return validate_and_sanitize_input(v, max_length=2000)


class ReviewRespondRequest(CamelModel):
    response: str = Field(min_length=1)

    @field_validator("response")
    @classmethod
    def sanitize_response(cls, v):
        return validate_and_sanitize_input(v, max_length=2000)


class ReviewResponse(CamelModel):
    id: int
    customer_id: int
    salon_id: int
    booking_id: Optional[int] = None
    staff_id: Optional[int] = None
    rating: int
    comment: Optional[str] = None
    images: Optional[list[str]] = None
    detailed_ratings: Optional[dict] = None
    is_verified: bool
    is_visible: bool
    salon_response: Optional[str] = None
    salon_response_date: Optional[datetime] = None
    helpful_count: int
    is_featured: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
