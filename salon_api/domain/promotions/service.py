"""Promotion service - salon promotions and code validation"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User
from ...models_billing import Promotion, PromotionStatus, PromotionType
from ...models_salon import Salon
from ...shared.dates import utcnow
from ..salons.repository import SalonRepository
from .pricing import FIXED_TYPES, PERCENTAGE_TYPES, calculate_discount
from .repository import PromotionRepository
from .schemas import PromotionCreate, PromotionUpdate, PromotionValidateRequest

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


class PromotionService:
    """Service layer for promotion business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PromotionRepository()
        self.salon_repo = SalonRepository()

    def _owned_salon(self, user: User) -> Salon:
        salon = self.salon_repo.get_salon_by_owner(self.db, user.id)
        if not salon:
            raise HTTPException(status_code=403, detail="Only salon owners can manage promotions")
        return salon

    def _owned_promotion(self, promotion_id: int, user: User) -> Promotion:
        promotion = self.repo.get_promotion(self.db, promotion_id)
        if not promotion:
            raise HTTPException(status_code=404, detail="Promotion not found")
        if promotion.salon.owner_id != user.id:
            raise HTTPException(status_code=403, detail="You can only manage your own salon's promotions")
        return promotion

    def create_promotion(self, data: PromotionCreate, user: User) -> Promotion:
        salon = self._owned_salon(user)
        if data.code and self.repo.code_exists(self.db, data.code):
            raise HTTPException(status_code=409, detail="Promotion code already exists")

        promotion = self.repo.create_promotion(self.db, salon.id, **data.column_values(exclude_unset=False))
        logger.info(f"🏷️ Promotion {promotion.id} ({promotion.code}) created for salon {salon.id}")
        return promotion

    def get_salon_promotions(self, salon_id: int) -> list[Promotion]:
        return self.repo.get_live_promotions(self.db, salon_id, utcnow())

    def update_promotion(self, promotion_id: int, data: PromotionUpdate, user: User) -> Promotion:
        promotion = self._owned_promotion(promotion_id, user)
        updates = {key: value for key, value in data.column_values().items() if value is not None}

        if "code" in updates and self.repo.code_exists(self.db, updates["code"], exclude_id=promotion.id):
            raise HTTPException(status_code=409, detail="Promotion code already exists")

        start_date = updates.get("start_date", promotion.start_date)
        end_date = updates.get("end_date", promotion.end_date)
        if end_date <= start_date:
            raise HTTPException(status_code=400, detail="endDate must be after startDate")

        discount_value = updates.get("discount_value", promotion.discount_value)
        if promotion.type == PromotionType.PERCENTAGE_DISCOUNT.value and discount_value > 100:
            raise HTTPException(status_code=400, detail="Percentage discounts cannot exceed 100")

        promotion = self.repo.update_promotion(self.db, promotion, **updates)
        logger.info(f"🏷️ Promotion {promotion.id} updated by user {user.id}")
        return promotion

    def delete_promotion(self, promotion_id: int, user: User) -> None:
        promotion = self._owned_promotion(promotion_id, user)
        self.repo.delete_promotion(self.db, promotion)
        logger.info(f"🗑️ Promotion {promotion_id} deleted by user {user.id}")

    def validate_code(self, data: PromotionValidateRequest, user: User) -> dict:
        """Price a service with a promotion code without redeeming it"""

        def rejected(reason: str, promotion=None) -> dict:
            logger.info(f"🏷️ Promotion code {data.code} rejected for user {user.id}: {reason}")
            return {
                "valid": False,
                "discount": 0,
                "final_amount": data.amount,
                "promotion_id": promotion.id if promotion else None,
                "reason": reason,
            }

        promotion = self.repo.get_by_code(self.db, data.code)
        if not promotion:
            return rejected("Promotion code not found")

        now = utcnow()
        if promotion.status != PromotionStatus.ACTIVE.value:
            return rejected("Promotion is not active", promotion)
        if now < promotion.start_date:
            return rejected("Promotion has not started yet", promotion)
        if now > promotion.end_date:
            return rejected("Promotion has expired", promotion)
        if promotion.usage_limit is not None and promotion.usage_count >= promotion.usage_limit:
            return rejected("Promotion usage limit reached", promotion)
        if promotion.min_purchase_amount is not None and data.amount < promotion.min_purchase_amount:
            return rejected(f"Minimum purchase amount is {promotion.min_purchase_amount:.2f}", promotion)
        if promotion.applicable_days and WEEKDAY_NAMES[now.weekday()] not in promotion.applicable_days:
            return rejected("Promotion is not valid today", promotion)

        service = self.salon_repo.get_service(self.db, data.service_id, promotion.salon_id)
        if not service:
            return rejected("Promotion does not apply to this service", promotion)
        if promotion.applicable_service_ids and service.id not in promotion.applicable_service_ids:
            return rejected("Promotion does not apply to this service", promotion)
        if promotion.excluded_service_ids and service.id in promotion.excluded_service_ids:
            return rejected("Promotion does not apply to this service", promotion)

        if promotion.is_first_time_only and self.repo.has_prior_bookings(self.db, user.id, promotion.salon_id):
            return rejected("Promotion is only valid for first-time customers", promotion)

        promotion_type = PromotionType(promotion.type)
        if promotion_type not in PERCENTAGE_TYPES | FIXED_TYPES:
            return rejected("Promotion does not offer a discount", promotion)

        discount = calculate_discount(
            promotion_type, promotion.discount_value, data.amount, promotion.max_discount_amount
        )
        return {
            "valid": True,
            "discount": discount,
            "final_amount": round(data.amount - discount, 2),
            "promotion_id": promotion.id,
            "reason": None,
        }
