"""Promotion repository - Database operations for promotions"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models_billing import Promotion, PromotionStatus
from ...models_booking import Booking, BookingStatus


class PromotionRepository:
    """Repository for promotion database operations"""

    @staticmethod
    def get_promotion(db: Session, promotion_id: int) -> Optional[Promotion]:
        return db.query(Promotion).filter(Promotion.id == promotion_id).first()

    @staticmethod
    def get_by_code(db: Session, code: str) -> Optional[Promotion]:
        return db.query(Promotion).filter(Promotion.code == code.upper()).first()

    @staticmethod
    def code_exists(db: Session, code: str, exclude_id: Optional[int] = None) -> bool:
        query = db.query(Promotion.id).filter(Promotion.code == code.upper())
        if exclude_id is not None:
            query = query.filter(Promotion.id != exclude_id)
        return query.first() is not None

    @staticmethod
    def get_live_promotions(db: Session, salon_id: int, now: datetime) -> list[Promotion]:
        return (
            db.query(Promotion)
            .filter(
                Promotion.salon_id == salon_id,
                Promotion.is_visible.is_(True),
                Promotion.status == PromotionStatus.ACTIVE.value,
                Promotion.start_date <= now,
                Promotion.end_date >= now,
            )
            .order_by(Promotion.end_date.asc(), Promotion.id.asc())
            .all()
        )

    @staticmethod
    def has_prior_bookings(db: Session, customer_id: int, salon_id: int) -> bool:
        return (
            db.query(Booking.id)
            .filter(
                Booking.customer_id == customer_id,
                Booking.salon_id == salon_id,
                Booking.status != BookingStatus.CANCELLED.value,
            )
            .first()
            is not None
        )

    @staticmethod
    def create_promotion(db: Session, salon_id: int, **promotion_data) -> Promotion:
        promotion = Promotion(salon_id=salon_id, **promotion_data)
        db.add(promotion)
        db.commit()
        db.refresh(promotion)
        return promotion

    @staticmethod
    def update_promotion(db: Session, promotion: Promotion, **updates) -> Promotion:
        for key, value in updates.items():
            setattr(promotion, key, value)

        db.commit()
        db.refresh(promotion)
        return promotion

    @staticmethod
    def delete_promotion(db: Session, promotion: Promotion) -> None:
        db.delete(promotion)
        db.commit()
