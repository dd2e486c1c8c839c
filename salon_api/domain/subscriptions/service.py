"""Subscription service - plan changes and the tier they grant"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import DEFAULT_CURRENCY
from ...models import CustomerTier, User
from ...models_billing import BillingCycle, Subscription, SubscriptionStatus, SubscriptionType
from ...models_salon import SalonTier
from ...shared.dates import utcnow
from ..salons.repository import SalonRepository
from ..users.repository import UserRepository
from .plans import CYCLE_LENGTH, PLANS, Plan, get_plan
from .repository import SubscriptionRepository
from .schemas import SubscriptionCancelRequest, SubscriptionCreate

logger = logging.getLogger(__name__)


def _audience_types(audience: str) -> list[str]:
    return [plan.type.value for plan in PLANS.values() if plan.audience == audience]


class SubscriptionService:
    """Service layer for subscription business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SubscriptionRepository()
        self.user_repo = UserRepository()
        self.salon_repo = SalonRepository()

    def list_plans(self) -> list[dict]:
        return [
            {
                "type": plan.type,
                "name": plan.name,
                "audience": plan.audience,
                "monthly_price": plan.monthly_price,
                "yearly_price": plan.price_for(BillingCycle.YEARLY),
                "currency": DEFAULT_CURRENCY,
                "try_on_credits": plan.try_on_credits,
                "features": plan.features,
            }
            for plan in PLANS.values()
        ]

    def subscribe(self, data: SubscriptionCreate, user: User) -> Subscription:
        plan = get_plan(data.type)

        # Resolve the target before touching any existing subscription
        profile = salon = None
        if plan.audience == "customer":
            profile = self.user_repo.get_profile_by_user_id(self.db, user.id)
            if not profile:
                raise HTTPException(status_code=404, detail="Customer profile not found")
        else:
            salon = self.salon_repo.get_salon_by_owner(self.db, user.id)
            if not salon:
                raise HTTPException(status_code=400, detail="You need a salon to subscribe to a salon plan")

        now = utcnow()
        for active in self.repo.get_active_subscriptions(self.db, user.id, _audience_types(plan.audience)):
            active.status = SubscriptionStatus.CANCELLED.value
            active.cancelled_at = now
            active.cancellation_reason = f"Replaced by {plan.type.value}"

        end_date = now + CYCLE_LENGTH[data.billing_cycle]
        subscription = self.repo.add_subscription(
            self.db,
            user_id=user.id,
            type=plan.type.value,
            status=SubscriptionStatus.ACTIVE.value,
            price=plan.price_for(data.billing_cycle),
            currency=DEFAULT_CURRENCY,
            billing_cycle=data.billing_cycle.value,
            start_date=now,
            end_date=end_date,
            next_billing_date=end_date if data.auto_renew and plan.monthly_price > 0 else None,
            auto_renew=data.auto_renew,
            features=dict(plan.features),
        )

        if profile is not None:
            profile.subscription_tier = plan.customer_tier.value
            profile.try_on_credits = plan.credits_for(data.billing_cycle)
            profile.subscription_start_date = now
            profile.subscription_end_date = end_date
            profile.auto_renew = data.auto_renew
        else:
            salon.subscription_tier = plan.salon_tier.value
            salon.subscription_start_date = now
            salon.subscription_end_date = end_date

        self.db.commit()
        self.db.refresh(subscription)
        logger.info(f"⭐ User {user.id} subscribed to {plan.type.value} ({data.billing_cycle.value})")
        return subscription

    def get_my_subscription(self, user: User, audience: Optional[str] = None) -> Subscription:
        types = _audience_types(audience) if audience else None
        active = self.repo.get_active_subscriptions(self.db, user.id, types)
        if not active:
            raise HTTPException(status_code=404, detail="No active subscription")
        return active[0]

    def cancel(self, subscription_id: int, data: SubscriptionCancelRequest, user: User) -> Subscription:
        subscription = self.repo.get_subscription(self.db, subscription_id)
        if not subscription:
            raise HTTPException(status_code=404, detail="Subscription not found")
        if subscription.user_id != user.id:
            raise HTTPException(status_code=403, detail="You can only cancel your own subscription")
        if subscription.status != SubscriptionStatus.ACTIVE.value:
            raise HTTPException(status_code=400, detail="Subscription is not active")

        now = utcnow()
        subscription.status = SubscriptionStatus.CANCELLED.value
        subscription.cancelled_at = now
        subscription.cancellation_reason = data.reason
        subscription.auto_renew = False
        subscription.next_billing_date = None

        self._fall_back_to_free(get_plan(SubscriptionType(subscription.type)), user.id)

        self.db.commit()
        self.db.refresh(subscription)
        logger.info(f"⭐ Subscription {subscription.id} cancelled by user {user.id}")
        return subscription

    def _fall_back_to_free(self, plan: Plan, user_id: int) -> None:
        if plan.audience == "customer":
            profile = self.user_repo.get_profile_by_user_id(self.db, user_id)
            if profile:
                profile.subscription_tier = CustomerTier.FREE.value
                profile.try_on_credits = 0
                profile.subscription_end_date = None
                profile.auto_renew = False
        else:
            salon = self.salon_repo.get_salon_by_owner(self.db, user_id)
            if salon:
                salon.subscription_tier = SalonTier.STARTER.value
                salon.subscription_end_date = None
