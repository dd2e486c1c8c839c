"""Payment repository - Database operations for payments"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models_billing import Payment


class PaymentRepository:
    """Repository for payment database operations"""

    @staticmethod
    def get_by_transaction_id(db: Session, transaction_id: str) -> Optional[Payment]:
        return db.query(Payment).filter(Payment.transaction_id == transaction_id).first()

    @staticmethod
    def transaction_id_exists(db: Session, transaction_id: str) -> bool:
        return db.query(Payment.id).filter(Payment.transaction_id == transaction_id).first() is not None

    @staticmethod
    def get_user_payments(db: Session, user_id: int) -> list[Payment]:
        return (
            db.query(Payment)
            .filter(Payment.user_id == user_id)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .all()
        )

    @staticmethod
    def create_payment(db: Session, **payment_data) -> Payment:
        payment = Payment(**payment_data)
        db.add(payment)
        db.commit()
        db.refresh(payment)
        return payment
