import enum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .database import Base
from .shared.dates import utcnow


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"
    RESCHEDULED = "rescheduled"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    PARTIALLY_PAID = "partially_paid"
    REFUNDED = "refunded"
    FAILED = "failed"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    salon_id = Column(Integer, ForeignKey("salons.id"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=True)
    appointment_date = Column(Date, nullable=False, index=True)
    appointment_time = Column(String(5), nullable=False)  # HH:MM, 24h
    duration_minutes = Column(Integer, nullable=False)
    status = Column(String(20), default=BookingStatus.PENDING.value, nullable=False)
    total_price = Column(Float, nullable=False)
    discount_amount = Column(Float, default=0, nullable=False)
    final_price = Column(Float, nullable=False)
    payment_status = Column(String(20), default=PaymentStatus.PENDING.value, nullable=False)
    payment_method = Column(String(50), nullable=True)
    payment_transaction_id = Column(String(255), nullable=True)
    selected_add_ons = Column(JSON, nullable=True)
    customer_notes = Column(Text, nullable=True)
    salon_notes = Column(Text, nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    booking_reference = Column(String(50), unique=True, index=True, nullable=False)
    is_reminder_sent = Column(Boolean, default=False, nullable=False)
    reminder_sent_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    # Slot held before the most recent reschedule
    previous_appointment_date = Column(Date, nullable=True)
    previous_appointment_time = Column(String(5), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    customer = relationship("User")
    salon = relationship("Salon")
    service = relationship("Service")
    staff = relationship("Staff")
