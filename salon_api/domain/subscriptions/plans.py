"""Subscription plan catalogue"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from ...config import FREE_WEEKLY_TRYONS
from ...models import CustomerTier
from ...models_billing import BillingCycle, SubscriptionType
from ...models_salon import SalonTier

CYCLE_LENGTH = {
    BillingCycle.MONTHLY: timedelta(days=30),
    BillingCycle.YEARLY: timedelta(days=365),
}

# Yearly plans bill twelve monthly cycles up front
CYCLES_PER_YEAR = 12


@dataclass(frozen=True)
class Plan:
    type: SubscriptionType
    name: str
    monthly_price: float
    try_on_credits: int = 0
    customer_tier: Optional[CustomerTier] = None
    salon_tier: Optional[SalonTier] = None
    features: dict = field(default_factory=dict)

    @property
    def audience(self) -> str:
        return "customer" if self.customer_tier is not None else "salon"

    def price_for(self, cycle: BillingCycle) -> float:
        if cycle == BillingCycle.YEARLY:
            return self.monthly_price * CYCLES_PER_YEAR
        return self.monthly_price

    def credits_for(self, cycle: BillingCycle) -> int:
        if cycle == BillingCycle.YEARLY:
            return self.try_on_credits * CYCLES_PER_YEAR
        return self.try_on_credits


PLANS = {
    SubscriptionType.CUSTOMER_FREE: Plan(
        type=SubscriptionType.CUSTOMER_FREE,
        name="Free",
        monthly_price=0,
        customer_tier=CustomerTier.FREE,
        features={"weeklyTryOns": FREE_WEEKLY_TRYONS},
    ),
    SubscriptionType.CUSTOMER_PLUS: Plan(
        type=SubscriptionType.CUSTOMER_PLUS,
        name="Plus",
        monthly_price=990,
        try_on_credits=80,
        customer_tier=CustomerTier.PLUS,
        features={"tryOnCredits": 80, "premiumHairstyles": True},
    ),
    SubscriptionType.CUSTOMER_PRO: Plan(
        type=SubscriptionType.CUSTOMER_PRO,
        name="Pro",
        monthly_price=1990,
        try_on_credits=250,
        customer_tier=CustomerTier.PRO,
        features={"tryOnCredits": 250, "premiumHairstyles": True, "prioritySupport": True},
    ),
    SubscriptionType.SALON_STARTER: Plan(
        type=SubscriptionType.SALON_STARTER,
        name="Starter",
        monthly_price=0,
        salon_tier=SalonTier.STARTER,
        features={"staffSeats": 2, "analytics": False, "featuredListing": False},
    ),
    SubscriptionType.SALON_GROWTH: Plan(
        type=SubscriptionType.SALON_GROWTH,
        name="Growth",
        monthly_price=2500,
        salon_tier=SalonTier.GROWTH,
        features={"staffSeats": 10, "analytics": True, "featuredListing": False},
    ),
    SubscriptionType.SALON_PRO: Plan(
        type=SubscriptionType.SALON_PRO,
        name="Pro",
        monthly_price=6500,
        salon_tier=SalonTier.PRO,
        features={"staffSeats": 50, "analytics": True, "featuredListing": True, "prioritySupport": True},
    ),
}


def get_plan(subscription_type: SubscriptionType) -> Plan:
    return PLANS[subscription_type]
