"""Booking domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator

from ...models_booking import BookingStatus, PaymentStatus
from ...shared.schemas import CamelModel
from ...shared.validators import validate_time_of_day
from ...utils.sanitization import validate_and_sanitize_input


class BookingCreate(CamelModel):
    """Schema for creating a booking"""

    salon_id: int
    service_id: int
    staff_id: Optional[int] = None
    appointment_date: date
    appointment_time: str
    selected_add_ons: Optional[list[str]] = None
    customer_notes: Optional[str] = None
    payment_method: Optional[str] = Field(default=None, max_length=50)

    @field_validator("appointment_time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_of_day(v)

    @field_validator("customer_notes")
    @classmethod
    def sanitize_notes(cls, v):
        return validate_and_sanitize_input(v, max_length=1000)


class CancelBookingRequest(CamelModel):
    reason: Optional[str] = None

    @field_validator("reason")
    @classmethod
    def sanitize_reason(cls, v):
        return validate_and_sanitize_input(v, max_length=1000)


class RescheduleBookingRequest(CamelModel):
    new_date: date
    new_time: str

    @field_validator("new_time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_of_day(v)


class BookingStatusUpdate(CamelModel):
    status: BookingStatus
    salon_notes: Optional[str] = None

    @field_validator("salon_notes")
    @classmethod
    def sanitize_notes(cls, v):
        return validate_and_sanitize_input(v, max_length=1000)


class BookingResponse(CamelModel):
    id: int
    customer_id: int
    salon_id: int
    service_id: int
    staff_id: Optional[int] = None
    appointment_date: date
    appointment_time: str
    duration_minutes: int
    status: BookingStatus
    total_price: float
    discount_amount: float
    final_price: float
    payment_status: PaymentStatus
    payment_method: Optional[str] = None
    payment_transaction_id: Optional[str] = None
    selected_add_ons: Optional[list[str]] = None
    customer_notes: Optional[str] = None
    salon_notes: Optional[str] = None
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    booking_reference: str
    is_reminder_sent: bool
    completed_at: Optional[datetime] = None
    previous_appointment_date: Optional[date] = None
    previous_appointment_time: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
