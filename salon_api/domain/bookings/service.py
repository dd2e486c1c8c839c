"""Booking service - availability, conflict-checked creation, cancel, reschedule and status changes"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import BOOKING_DAY_END, BOOKING_DAY_START, BOOKING_SLOT_MINUTES
from ...models import User, UserRole
from ...models_booking import Booking, BookingStatus
from ...models_engagement import NotificationType
from ...models_salon import Salon, Staff
from ...shared.dates import utcnow
from ...shared.identifiers import generate_booking_reference
from ..notifications.service import NotificationService
from ..salons.repository import SalonRepository
from .availability import conflicts_with_any, generate_slots, time_to_minutes, working_window
from .repository import BookingRepository
from .schemas import BookingCreate, BookingStatusUpdate, CancelBookingRequest, RescheduleBookingRequest
from .state import can_transition

logger = logging.getLogger(__name__)


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.salon_repo = SalonRepository()
        self.notifications = NotificationService(db)

    # ============================================================================
    # HELPERS
    # ============================================================================

    def _get_salon(self, salon_id: int, lock: bool = False) -> Salon:
        if lock:
            salon = self.salon_repo.get_salon_for_update(self.db, salon_id)
        else:
            salon = self.salon_repo.get_salon_by_id(self.db, salon_id)
        if not salon:
            raise HTTPException(status_code=404, detail="Salon not found")
        return salon

    def _get_staff(self, salon_id: int, staff_id: int) -> Staff:
        staff = self.salon_repo.get_staff_member(self.db, staff_id, salon_id)
        if not staff:
            raise HTTPException(status_code=404, detail="Staff member not found")
        return staff

    def _occupied_intervals(
        self, salon_id: int, day: date, staff_id: Optional[int], exclude_booking_id: Optional[int] = None
    ) -> list[tuple[int, int]]:
        bookings = self.repo.get_day_bookings(self.db, salon_id, day, staff_id, exclude_booking_id)
        intervals = []
        for booking in bookings:
            start = time_to_minutes(booking.appointment_time)
            intervals.append((start, start + booking.duration_minutes))
        return intervals

    def _window_for(self, salon: Salon, day: date) -> Optional[tuple[int, int]]:
        return working_window(salon.working_hours, day, BOOKING_DAY_START, BOOKING_DAY_END)

    @staticmethod
    def _earliest_start(day: date) -> Optional[int]:
        """First start minute still open on `day`; None for past days"""
        now = utcnow()
        if day < now.date():
            return None
        if day == now.date():
            # Starts at or before the current minute have elapsed
            return now.hour * 60 + now.minute + 1
        return 0

    def _ensure_slot_free(
        self,
        salon: Salon,
        day: date,
        appointment_time: str,
        duration: int,
        staff_id: Optional[int],
        exclude_booking_id: Optional[int] = None,
    ) -> None:
        earliest = self._earliest_start(day)
        if earliest is None:
            raise HTTPException(status_code=400, detail="Appointment date cannot be in the past")

        window = self._window_for(salon, day)
        if window is None:
            raise HTTPException(status_code=400, detail="The salon is closed on this day")

        start = time_to_minutes(appointment_time)
        if start < earliest:
            raise HTTPException(status_code=400, detail="Appointment time has already passed")
        end = start + duration
        if start < window[0] or end > window[1]:
            raise HTTPException(status_code=400, detail="This time slot is outside working hours")

        occupied = self._occupied_intervals(salon.id, day, staff_id, exclude_booking_id)
        if conflicts_with_any(start, end, occupied):
            logger.warning(f"⚠️ Slot {day} {appointment_time} ({duration}m) taken at salon {salon.id}")
            raise HTTPException(status_code=400, detail="This time slot is not available")

    def _unique_reference(self) -> str:
        reference = generate_booking_reference()
        while self.repo.reference_exists(self.db, reference):
            reference = generate_booking_reference()
        return reference

    def _can_manage(self, booking: Booking, user: User) -> bool:
        """Admins and the owner of the booked salon"""
        if user.role == UserRole.ADMIN.value:
            return True
        salon = self.salon_repo.get_salon_by_id(self.db, booking.salon_id)
        return salon is not None and salon.owner_id == user.id

    def _commit(self, booking: Booking) -> Booking:
        self.db.commit()
        self.db.refresh(booking)
        return booking

    # ============================================================================
    # AVAILABILITY
    # ============================================================================

    def get_available_slots(
        self, salon_id: int, day: date, service_id: int, staff_id: Optional[int] = None
    ) -> list[str]:
        """Free start times for the service on `day`, in ascending order"""
        salon = self._get_salon(salon_id)
        service = self.salon_repo.get_service(self.db, service_id, salon_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")

        if staff_id is not None:
            staff = self._get_staff(salon_id, staff_id)
            if not staff.accepts_bookings:
                return []

        earliest = self._earliest_start(day)
        window = self._window_for(salon, day)
        if earliest is None or window is None:
            return []

        occupied = self._occupied_intervals(salon_id, day, staff_id)
        candidates = generate_slots(
            window[0], window[1], service.duration_minutes, BOOKING_SLOT_MINUTES, occupied
        )
        return [slot for slot in candidates if time_to_minutes(slot) >= earliest]

    # ============================================================================
    # CREATE / READ
    # ============================================================================

    def create_booking(self, data: BookingCreate, user: User) -> Booking:
        """Check the slot and insert the booking while holding the salon row lock"""
        logger.info(f"📥 Booking request from user {user.id} for salon {data.salon_id}")

        salon = self._get_salon(data.salon_id, lock=True)
        if not salon.is_active or not salon.accepts_online_bookings:
            raise HTTPException(status_code=400, detail="This salon is not accepting online bookings")

        service = self.salon_repo.get_service(self.db, data.service_id, salon.id)
        if not service or not service.is_active:
            raise HTTPException(status_code=404, detail="Service not found")

        if data.staff_id is not None:
            staff = self._get_staff(salon.id, data.staff_id)
            if not staff.accepts_bookings or not staff.is_active:
                raise HTTPException(status_code=400, detail="This staff member is not accepting bookings")

        self._ensure_slot_free(
            salon, data.appointment_date, data.appointment_time, service.duration_minutes, data.staff_id
        )

        # Promotions are quoted via /promotions/validate but not applied here
        price = service.discounted_price if service.discounted_price is not None else service.price

        booking = self.repo.add_booking(
            self.db,
            customer_id=user.id,
            salon_id=salon.id,
            service_id=service.id,
            staff_id=data.staff_id,
            appointment_date=data.appointment_date,
            appointment_time=data.appointment_time,
            duration_minutes=service.duration_minutes,
            status=BookingStatus.PENDING.value,
            total_price=price,
            discount_amount=0,
            final_price=price,
            selected_add_ons=data.selected_add_ons,
            customer_notes=data.customer_notes,
            payment_method=data.payment_method,
            booking_reference=self._unique_reference(),
        )
        self.salon_repo.increment_service_booking_count(self.db, service.id)
        self.db.flush()
        self.notifications.notify_booking_event(booking, NotificationType.BOOKING_CONFIRMATION)

        booking = self._commit(booking)
        logger.info(f"✅ Booking {booking.booking_reference} created for user {user.id}")
        return booking

    def get_booking(self, booking_id: int, user: User) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.customer_id != user.id and not self._can_manage(booking, user):
            raise HTTPException(status_code=403, detail="You do not have access to this booking")
        return booking

    def get_booking_by_reference(self, reference: str, user: User) -> Booking:
        booking = self.repo.get_booking_by_reference(self.db, reference)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.customer_id != user.id and not self._can_manage(booking, user):
            raise HTTPException(status_code=403, detail="You do not have access to this booking")
        return booking

    def get_my_bookings(self, user: User, status: Optional[str] = None) -> list[Booking]:
        return self.repo.find_bookings(self.db, customer_id=user.id, status=status)

    def get_salon_bookings(
        self, salon_id: int, user: User, from_date: Optional[date] = None, to_date: Optional[date] = None
    ) -> list[Booking]:
        salon = self._get_salon(salon_id)
        if salon.owner_id != user.id and user.role != UserRole.ADMIN.value:
            raise HTTPException(status_code=403, detail="You can only view bookings for your own salon")
        return self.repo.find_bookings(self.db, salon_id=salon_id, from_date=from_date, to_date=to_date)

    # ============================================================================
    # STATE CHANGES
    # ============================================================================

    def cancel_booking(self, booking_id: int, data: CancelBookingRequest, user: User) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.customer_id != user.id:
            raise HTTPException(status_code=403, detail="You can only cancel your own bookings")
        if not can_transition(booking.status, BookingStatus.CANCELLED.value):
            raise HTTPException(status_code=400, detail="This booking cannot be cancelled")

        booking.status = BookingStatus.CANCELLED.value
        booking.cancellation_reason = data.reason
        booking.cancelled_at = utcnow()
        self.notifications.notify_booking_event(booking, NotificationType.BOOKING_CANCELLED)

        logger.info(f"🚫 Booking {booking.booking_reference} cancelled by customer {user.id}")
        return self._commit(booking)

    def reschedule_booking(self, booking_id: int, data: RescheduleBookingRequest, user: User) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.customer_id != user.id:
            raise HTTPException(status_code=403, detail="You can only reschedule your own bookings")
        if not can_transition(booking.status, BookingStatus.RESCHEDULED.value):
            raise HTTPException(status_code=400, detail="This booking cannot be rescheduled")

        salon = self._get_salon(booking.salon_id, lock=True)
        self._ensure_slot_free(
            salon,
            data.new_date,
            data.new_time,
            booking.duration_minutes,
            booking.staff_id,
            exclude_booking_id=booking.id,
        )

        booking.previous_appointment_date = booking.appointment_date
        booking.previous_appointment_time = booking.appointment_time
        booking.appointment_date = data.new_date
        booking.appointment_time = data.new_time
        booking.status = BookingStatus.RESCHEDULED.value
        booking.is_reminder_sent = False
        booking.reminder_sent_at = None
        self.notifications.notify_booking_event(booking, NotificationType.BOOKING_RESCHEDULED)

        logger.info(f"🔁 Booking {booking.booking_reference} moved to {data.new_date} {data.new_time}")
        return self._commit(booking)

    def update_status(self, booking_id: int, data: BookingStatusUpdate, user: User) -> Booking:
        """Salon-side status change, validated against the transition table"""
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        if not self._can_manage(booking, user):
            raise HTTPException(status_code=403, detail="Only the salon owner can change booking status")

        target = data.status
        if not can_transition(booking.status, target.value):
            raise HTTPException(
                status_code=400,
                detail=f"Cannot change booking status from {booking.status} to {target.value}",
            )

        booking.status = target.value
        if data.salon_notes is not None:
            booking.salon_notes = data.salon_notes

        if target == BookingStatus.COMPLETED:
            booking.completed_at = utcnow()
            if booking.staff_id is not None:
                self.db.query(Staff).filter(Staff.id == booking.staff_id).update(
                    {Staff.completed_bookings: Staff.completed_bookings + 1}, synchronize_session=False
                )
            self.notifications.notify_booking_event(booking, NotificationType.BOOKING_COMPLETED)
        elif target == BookingStatus.CANCELLED:
            booking.cancelled_at = utcnow()
            self.notifications.notify_booking_event(booking, NotificationType.BOOKING_CANCELLED)

        logger.info(f"📋 Booking {booking.booking_reference} status -> {target.value} by user {user.id}")
        return self._commit(booking)
