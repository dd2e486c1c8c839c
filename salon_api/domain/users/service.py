"""User service - Business logic for the caller's account and customer profile"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import FREE_WEEKLY_TRYONS
from ...models import CustomerProfile, CustomerTier, User
from ...shared.dates import utcnow
from ..ai_tryon.quota import remaining_try_ons
from .repository import UserRepository
from .schemas import CustomerProfileResponse, CustomerProfileUpdate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def update_me(self, data: UserUpdate, user: User) -> User:
        updates = data.column_values()
        logger.info(f"📝 Updating user {user.id}: {sorted(updates)}")
        return self.repo.update_user(self.db, user, **updates)

    def get_customer_profile(self, user: User) -> CustomerProfile:
        profile = self.repo.get_profile_by_user_id(self.db, user.id)
        if not profile:
            raise HTTPException(status_code=404, detail="Customer profile not found")
        return profile

    def describe_customer_profile(self, user: User) -> CustomerProfileResponse:
        """Profile plus the allowance left right now; nothing is written"""
        profile = self.get_customer_profile(user)
        remaining, reset_date = remaining_try_ons(
            profile.subscription_tier,
            profile.try_on_credits,
            profile.weekly_try_ons_used,
            profile.weekly_reset_date,
            utcnow(),
            FREE_WEEKLY_TRYONS,
        )
        response = CustomerProfileResponse.model_validate(profile)
        response.remaining_try_ons = remaining
        response.weekly_reset_date = reset_date
        if profile.subscription_tier == CustomerTier.FREE.value:
            response.remaining_weekly_try_ons = remaining
        if reset_date is not None:
            # Window may have rolled since the last try-on
            response.weekly_try_ons_used = FREE_WEEKLY_TRYONS - remaining
        return response

    def update_customer_profile(self, data: CustomerProfileUpdate, user: User) -> CustomerProfileResponse:
        profile = self.get_customer_profile(user)
        self.repo.update_profile(self.db, profile, **data.column_values())
        return self.describe_customer_profile(user)
