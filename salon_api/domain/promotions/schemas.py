"""Promotion domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from ...models_billing import PromotionStatus, PromotionType
from ...shared.dates import to_naive_utc
from ...shared.schemas import CamelModel
from ...utils.sanitization import validate_and_sanitize_input

WEEKDAYS = {"monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"}


def _normalize_code(v):
    if v is None:
        return v
    code = v.strip().upper()
    if not code.replace("-", "").replace("_", "").isalnum():
        raise ValueError("Promotion code may only contain letters, digits, '-' and '_'")
    return code


def _normalize_days(v):
    if v is None:
        return v
    days = [day.strip().lower() for day in v]
    unknown = set(days) - WEEKDAYS
    if unknown:
        raise ValueError(f"Unknown weekday(s): {', '.join(sorted(unknown))}")
    return days


class PromotionBase(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    type: PromotionType
    code: Optional[str] = Field(default=None, min_length=3, max_length=50)
    discount_value: float = Field(ge=0)
    min_purchase_amount: Optional[float] = Field(default=None, ge=0)
    max_discount_amount: Optional[float] = Field(default=None, gt=0)
    usage_limit: Optional[int] = Field(default=None, gt=0)
    per_customer_limit: int = Field(default=1, gt=0)
    start_date: datetime
    end_date: datetime
    status: PromotionStatus = PromotionStatus.ACTIVE
    applicable_service_ids: Optional[list[int]] = None
    excluded_service_ids: Optional[list[int]] = None
    applicable_days: Optional[list[str]] = None
    image_url: Optional[str] = None
    is_first_time_only: bool = False
    is_visible: bool = True
    requires_code: bool = True
    terms_and_conditions: Optional[str] = None

    @field_validator("title", "description", "terms_and_conditions")
    @classmethod
    def sanitize_text(cls, v):
        return validate_and_sanitize_input(v, max_length=2000)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v):
        return _normalize_code(v)

    @field_validator("applicable_days")
    @classmethod
    def normalize_days(cls, v):
        return _normalize_days(v)

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v):
        return to_naive_utc(v)


class PromotionCreate(PromotionBase):
    @model_validator(mode="after")
    def check_rules(self):
        if self.end_date <= self.start_date:
            raise ValueError("endDate must be after startDate")
        if self.type == PromotionType.PERCENTAGE_DISCOUNT and self.discount_value > 100:
            raise ValueError("Percentage discounts cannot exceed 100")
        if self.requires_code and not self.code:
            raise ValueError("A code is required when requiresCode is set")
        return self


class PromotionUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    code: Optional[str] = Field(default=None, min_length=3, max_length=50)
    discount_value: Optional[float] = Field(default=None, ge=0)
    min_purchase_amount: Optional[float] = Field(default=None, ge=0)
    max_discount_amount: Optional[float] = Field(default=None, gt=0)
    usage_limit: Optional[int] = Field(default=None, gt=0)
    per_customer_limit: Optional[int] = Field(default=None, gt=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[PromotionStatus] = None
    applicable_service_ids: Optional[list[int]] = None
    excluded_service_ids: Optional[list[int]] = None
    applicable_days: Optional[list[str]] = None
    image_url: Optional[str] = None
    is_first_time_only: Optional[bool] = None
    is_visible: Optional[bool] = None
    requires_code: Optional[bool] = None
    terms_and_conditions: Optional[str] = None

    @field_validator("title", "description", "terms_and_conditions")
    @classmethod
    def sanitize_text(cls, v):
        return validate_and_sanitize_input(v, max_length=2000)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v):
        return _normalize_code(v)

    @field_validator("applicable_days")
    @classmethod
    def normalize_days(cls, v):
        return _normalize_days(v)

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v):
        return to_naive_utc(v)


class PromotionValidateRequest(CamelModel):
    code: str = Field(min_length=1)
    service_id: int
    amount: float = Field(gt=0)

    @field_validator("code")
    @classmethod
    def upper_code(cls, v):
        return v.strip().upper()


class PromotionValidationResponse(CamelModel):
    valid: bool
    discount: float = 0
    final_amount: float
    promotion_id: Optional[int] = None
    reason: Optional[str] = None


class PromotionResponse(CamelModel):
    id: int
    salon_id: int
    title: str
    description: Optional[str] = None
    type: PromotionType
    code: Optional[str] = None
    discount_value: float
    min_purchase_amount: Optional[float] = None
    max_discount_amount: Optional[float] = None
    usage_limit: Optional[int] = None
    usage_count: int
    per_customer_limit: int
    start_date: datetime
    end_date: datetime
    status: PromotionStatus
    applicable_service_ids: Optional[list[int]] = None
    excluded_service_ids: Optional[list[int]] = None
    applicable_days: Optional[list[str]] = None
    image_url: Optional[str] = None
    is_first_time_only: bool
    is_visible: bool
    requires_code: bool
    terms_and_conditions: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
