"""Booking repository - Database operations for bookings"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models_booking import Booking, BookingStatus


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: int) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def get_booking_by_reference(db: Session, reference: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.booking_reference == reference.upper()).first()

    @staticmethod
    def reference_exists(db: Session, reference: str) -> bool:
        return db.query(Booking.id).filter(Booking.booking_reference == reference).first() is not None

    @staticmethod
    def get_day_bookings(
        db: Session,
        salon_id: int,
        day: date,
        staff_id: Optional[int] = None,
        exclude_booking_id: Optional[int] = None,
    ) -> list[Booking]:
        """Bookings that occupy time on `day` (cancelled ones free their slot)"""
        query = db.query(Booking).filter(
            Booking.salon_id == salon_id,
            Booking.appointment_date == day,
            Booking.status != BookingStatus.CANCELLED.value,
        )
        if staff_id is not None:
            query = query.filter(Booking.staff_id == staff_id)
        if exclude_booking_id is not None:
            query = query.filter(Booking.id != exclude_booking_id)
        return query.all()

    @staticmethod
    def find_bookings(
        db: Session,
        customer_id: Optional[int] = None,
        salon_id: Optional[int] = None,
        status: Optional[str] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> list[Booking]:
        query = db.query(Booking)
        if customer_id is not None:
            query = query.filter(Booking.customer_id == customer_id)
        if salon_id is not None:
            query = query.filter(Booking.salon_id == salon_id)
        if status:
            query = query.filter(Booking.status == status)
        if from_date:
            query = query.filter(Booking.appointment_date >= from_date)
        if to_date:
            query = query.filter(Booking.appointment_date <= to_date)
        return query.order_by(Booking.appointment_date, Booking.appointment_time, Booking.id).all()

    @staticmethod
    def add_booking(db: Session, **booking_data) -> Booking:
        """Stage a booking; the caller commits"""
        booking = Booking(**booking_data)
        db.add(booking)
        return booking
