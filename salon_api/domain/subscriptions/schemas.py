"""Subscription domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...models_billing import BillingCycle, SubscriptionStatus, SubscriptionType
from ...shared.schemas import CamelModel
from ...utils.sanitization import validate_and_sanitize_input


class PlanResponse(CamelModel):
    type: SubscriptionType
    name: str
    audience: str
    monthly_price: float
    yearly_price: float
    currency: str
    try_on_credits: int
    features: dict


class SubscriptionCreate(CamelModel):
    type: SubscriptionType
    billing_cycle: BillingCycle = BillingCycle.MONTHLY
    auto_renew: bool = True


class SubscriptionCancelRequest(CamelModel):
    reason: Optional[str] = None

    @field_validator("reason")
    @classmethod
    def sanitize_reason(cls, v):
        return validate_and_sanitize_input(v, max_length=255)


class SubscriptionResponse(CamelModel):
    id: int
    user_id: int
    type: SubscriptionType
    status: SubscriptionStatus
    price: float
    currency: str
    billing_cycle: BillingCycle
    start_date: datetime
    end_date: datetime
    next_billing_date: Optional[datetime] = None
    auto_renew: bool
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    features: Optional[dict] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
