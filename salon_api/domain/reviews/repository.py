"""Review repository - Database operations for reviews"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models_engagement import Review


class ReviewRepository:
    """Repository for review database operations"""

    @staticmethod
    def get_review(db: Session, review_id: int) -> Optional[Review]:
        return db.query(Review).filter(Review.id == review_id).first()

    @staticmethod
    def get_review_for_booking(db: Session, booking_id: int, customer_id: int) -> Optional[Review]:
        return (
            db.query(Review)
            .filter(Review.booking_id == booking_id, Review.customer_id == customer_id)
            .first()
        )

    @staticmethod
    def get_salon_reviews(db: Session, salon_id: int) -> list[Review]:
        return (
            db.query(Review)
            .filter(Review.salon_id == salon_id, Review.is_visible.is_(True))
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )

    @staticmethod
    def create_review(db: Session, **review_data) -> Review:
        review = Review(**review_data)
        db.add(review)
        db.commit()
        db.refresh(review)
        return review

    @staticmethod
    def increment_helpful(db: Session, review_id: int) -> None:
        db.query(Review).filter(Review.id == review_id).update(
            {Review.helpful_count: Review.helpful_count + 1}, synchronize_session=False
        )
        db.commit()
