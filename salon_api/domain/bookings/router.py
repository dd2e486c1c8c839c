"""Booking router - FastAPI endpoints for appointments"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...models_booking import BookingStatus
from .schemas import (
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
    CancelBookingRequest,
    RescheduleBookingRequest,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.create_booking(data, current_user)


@router.get("/my-bookings", response_model=list[BookingResponse])
async def my_bookings(
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.get_my_bookings(current_user, booking_status.value if booking_status else None)


@router.get("/salon/{salon_id}", response_model=list[BookingResponse])
async def salon_bookings(
    salon_id: int,
    from_date: Optional[date] = Query(None, alias="fromDate"),
    to_date: Optional[date] = Query(None, alias="toDate"),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.get_salon_bookings(salon_id, current_user, from_date, to_date)


@router.get("/available-slots", response_model=list[str])
async def available_slots(
    salon_id: int = Query(..., alias="salonId"),
    day: date = Query(..., alias="date"),
    service_id: int = Query(..., alias="serviceId"),
    staff_id: Optional[int] = Query(None, alias="staffId"),
    service: BookingService = Depends(get_booking_service),
):
    """Free HH:MM start times for a service on a given day"""
    return service.get_available_slots(salon_id, day, service_id, staff_id)


@router.get("/reference/{reference}", response_model=BookingResponse)
async def get_by_reference(
    reference: str,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.get_booking_by_reference(reference, current_user)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.get_booking(booking_id, current_user)


@router.patch("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: int,
    data: Optional[CancelBookingRequest] = None,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.cancel_booking(booking_id, data or CancelBookingRequest(), current_user)


@router.patch("/{booking_id}/reschedule", response_model=BookingResponse)
async def reschedule_booking(
    booking_id: int,
    data: RescheduleBookingRequest,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.reschedule_booking(booking_id, data, current_user)


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: int,
    data: BookingStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.update_status(booking_id, data, current_user)
