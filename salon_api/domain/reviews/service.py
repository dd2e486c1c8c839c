"""Review service - Business logic for salon reviews and rating aggregation"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User
from ...models_booking import BookingStatus
from ...models_engagement import Review
from ...shared.dates import utcnow
from ..bookings.repository import BookingRepository
from ..salons.repository import SalonRepository
from .repository import ReviewRepository
from .schemas import ReviewCreate, ReviewRespondRequest

logger = logging.getLogger(__name__)


class ReviewService:
    """Service layer for review business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ReviewRepository()
        self.salon_repo = SalonRepository()
        self.booking_repo = BookingRepository()

    def create_review(self, data: ReviewCreate, user: User) -> Review:
        salon = self.salon_repo.get_salon_by_id(self.db, data.salon_id)
        if not salon:
            raise HTTPException(status_code=404, detail="Salon not found")

        is_verified = False
        if data.booking_id is not None:
            booking = self.booking_repo.get_booking_by_id(self.db, data.booking_id)
            if not booking or booking.salon_id != salon.id:
                raise HTTPException(status_code=404, detail="Booking not found")
            if booking.customer_id != user.id:
                raise HTTPException(status_code=403, detail="You can only review your own bookings")
            if self.repo.get_review_for_booking(self.db, booking.id, user.id):
                raise HTTPException(status_code=400, detail="You have already reviewed this booking")
            is_verified = booking.status == BookingStatus.COMPLETED.value

        if data.staff_id is not None and not self.salon_repo.get_staff_member(self.db, data.staff_id, salon.id):
            raise HTTPException(status_code=404, detail="Staff member not found")

        review = self.repo.create_review(
            self.db,
            customer_id=user.id,
            salon_id=salon.id,
            booking_id=data.booking_id,
            staff_id=data.staff_id,
            rating=data.rating,
            comment=data.comment,
            images=data.images,
            detailed_ratings=data.detailed_ratings.model_dump(exclude_none=True) if data.detailed_ratings else None,
            is_verified=is_verified,
        )
        self.salon_repo.refresh_rating(self.db, salon.id)

        logger.info(f"⭐ Review {review.id} ({review.rating}/5) for salon {salon.id} by user {user.id}")
        return review

    def get_salon_reviews(self, salon_id: int) -> list[Review]:
        return self.repo.get_salon_reviews(self.db, salon_id)

    def get_review(self, review_id: int) -> Review:
        review = self.repo.get_review(self.db, review_id)
        if not review:
            raise HTTPException(status_code=404, detail="Review not found")
        return review

    def respond(self, review_id: int, data: ReviewRespondRequest, user: User) -> Review:
        review = self.get_review(review_id)
        salon = self.salon_repo.get_salon_by_id(self.db, review.salon_id)
        if not salon or salon.owner_id != user.id:
            raise HTTPException(status_code=403, detail="Only the salon owner can respond to this review")

        review.salon_response = data.response
        review.salon_response_date = utcnow()
        self.db.commit()
        self.db.refresh(review)
        return review

    def mark_helpful(self, review_id: int) -> Review:
        review = self.get_review(review_id)
        self.repo.increment_helpful(self.db, review.id)
        self.db.refresh(review)
        return review
