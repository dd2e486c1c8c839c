"""Payment service - payment records and their effect on bookings"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User
from ...models_billing import Payment, PaymentRecordStatus, PaymentType
from ...models_booking import PaymentStatus
from ...shared.dates import utcnow
from ...shared.identifiers import generate_transaction_id
from ..bookings.repository import BookingRepository
from .repository import PaymentRepository
from .schemas import PaymentCreate, PaymentStatusUpdate

logger = logging.getLogger(__name__)

PAYMENT_TRANSITIONS = {
    PaymentRecordStatus.PENDING: {
        PaymentRecordStatus.PROCESSING,
        PaymentRecordStatus.COMPLETED,
        PaymentRecordStatus.FAILED,
        PaymentRecordStatus.CANCELLED,
    },
    PaymentRecordStatus.PROCESSING: {
        PaymentRecordStatus.COMPLETED,
        PaymentRecordStatus.FAILED,
        PaymentRecordStatus.CANCELLED,
    },
    PaymentRecordStatus.COMPLETED: {PaymentRecordStatus.REFUNDED},
    PaymentRecordStatus.FAILED: set(),
    PaymentRecordStatus.REFUNDED: set(),
    PaymentRecordStatus.CANCELLED: set(),
}


class PaymentService:
    """Service layer for payment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PaymentRepository()
        self.booking_repo = BookingRepository()

    def create_payment(self, data: PaymentCreate, user: User) -> Payment:
        if data.booking_id is not None:
            booking = self.booking_repo.get_booking_by_id(self.db, data.booking_id)
            if not booking:
                raise HTTPException(status_code=404, detail="Booking not found")
            if booking.customer_id != user.id:
                raise HTTPException(status_code=403, detail="You can only pay for your own bookings")

        transaction_id = generate_transaction_id()
        while self.repo.transaction_id_exists(self.db, transaction_id):
            transaction_id = generate_transaction_id()

        values = data.column_values(exclude_unset=False)
        values["metadata_"] = values.pop("metadata")
        payment = self.repo.create_payment(
            self.db,
            user_id=user.id,
            transaction_id=transaction_id,
            status=PaymentRecordStatus.PENDING.value,
            **values,
        )
        logger.info(f"💳 Payment {payment.transaction_id} created for user {user.id}: {payment.amount} {payment.currency}")
        return payment

    def get_user_payments(self, user: User) -> list[Payment]:
        return self.repo.get_user_payments(self.db, user.id)

    def update_status(self, transaction_id: str, data: PaymentStatusUpdate, admin: User) -> Payment:
        payment = self.repo.get_by_transaction_id(self.db, transaction_id)
        if not payment:
            raise HTTPException(status_code=404, detail="Payment not found")

        current = PaymentRecordStatus(payment.status)
        if data.status not in PAYMENT_TRANSITIONS[current]:
            raise HTTPException(
                status_code=400,
                detail=f"Cannot change payment status from {current.value} to {data.status.value}",
            )

        payment.status = data.status.value
        for field in ("external_transaction_id", "payment_gateway", "gateway_response", "receipt_url"):
            value = getattr(data, field)
            if value is not None:
                setattr(payment, field, value)

        booking = None
        if payment.type == PaymentType.BOOKING.value and payment.booking_id is not None:
            booking = self.booking_repo.get_booking_by_id(self.db, payment.booking_id)

        if data.status == PaymentRecordStatus.COMPLETED:
            payment.paid_at = utcnow()
            if booking:
                fully_paid = payment.amount >= booking.final_price
                booking.payment_status = (
                    PaymentStatus.PAID.value if fully_paid else PaymentStatus.PARTIALLY_PAID.value
                )
                booking.payment_transaction_id = payment.transaction_id
                booking.payment_method = payment.payment_method
        elif data.status == PaymentRecordStatus.REFUNDED:
            payment.refunded_at = utcnow()
            payment.refund_reason = data.refund_reason
            payment.refunded_amount = data.refunded_amount or payment.amount
            if booking:
                booking.payment_status = PaymentStatus.REFUNDED.value
        elif data.status == PaymentRecordStatus.FAILED and booking:
            booking.payment_status = PaymentStatus.FAILED.value

        self.db.commit()
        self.db.refresh(payment)
        logger.info(f"💳 Payment {transaction_id} -> {data.status.value} by admin {admin.id}")
        return payment
