"""Salon service - Business logic for salons, their services and staff"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import DEFAULT_SEARCH_RADIUS_KM
from ...models import User, UserRole
from ...models_booking import Booking
from ...models_salon import Salon, Service, Staff, VerificationStatus
from ...shared.identifiers import generate_salon_slug
from .geo import haversine_km
from .repository import SalonRepository
from .schemas import (
    NearbySalonResponse,
    SalonCreate,
    SalonResponse,
    SalonUpdate,
    ServiceCreate,
    ServiceUpdate,
    StaffCreate,
    StaffUpdate,
    VerificationUpdate,
)

logger = logging.getLogger(__name__)


class SalonService:
    """Service layer for the salon catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SalonRepository()

    def _unique_slug(self, business_name: str) -> str:
        slug = generate_salon_slug(business_name)
        while self.repo.slug_exists(self.db, slug):
            slug = generate_salon_slug(business_name)
        return slug

    # ============================================================================
    # SALONS
    # ============================================================================

    def get_salon(self, salon_id: int) -> Salon:
        salon = self.repo.get_salon_by_id(self.db, salon_id)
        if not salon:
            raise HTTPException(status_code=404, detail="Salon not found")
        return salon

    def get_owned_salon(self, salon_id: int, user: User) -> Salon:
        """Salon the caller owns; 403 for anyone else"""
        salon = self.get_salon(salon_id)
        if salon.owner_id != user.id:
            logger.warning(f"🚫 User {user.id} tried to modify salon {salon_id}")
            raise HTTPException(status_code=403, detail="You can only manage your own salon")
        return salon

    def create_salon(self, data: SalonCreate, user: User) -> Salon:
        if self.repo.get_salon_by_owner(self.db, user.id):
            raise HTTPException(status_code=400, detail="User already owns a salon")

        values = data.column_values(exclude_unset=False)
        salon = self.repo.create_salon(
            self.db,
            user.id,
            slug=self._unique_slug(data.business_name),
            verification_status=VerificationStatus.PENDING.value,
            **values,
        )

        if user.role == UserRole.CUSTOMER.value:
            user.role = UserRole.SALON_OWNER.value
            self.db.commit()

        logger.info(f"🏪 Salon {salon.id} ({salon.slug}) created by user {user.id}")
        return salon

    def list_salons(
        self,
        city: Optional[str] = None,
        gender: Optional[str] = None,
        min_rating: Optional[float] = None,
        search: Optional[str] = None,
    ) -> list[Salon]:
        return self.repo.search_salons(self.db, city, gender, min_rating, search)

    def search_nearby(
        self, latitude: float, longitude: float, radius_km: Optional[float] = None
    ) -> list[NearbySalonResponse]:
        """Listed salons within radius_km of the point, nearest first"""
        radius = DEFAULT_SEARCH_RADIUS_KM if radius_km is None else radius_km
        results = []
        for salon in self.repo.get_listed_salons_with_coordinates(self.db):
            distance = haversine_km(latitude, longitude, salon.latitude, salon.longitude)
            if distance <= radius:
                summary = SalonResponse.model_validate(salon).model_dump()
                results.append(NearbySalonResponse(**summary, distance_km=round(distance, 2)))

        results.sort(key=lambda r: r.distance_km)
        return results

    def view_salon(self, salon_id: int) -> Salon:
        """Public detail view; counts the visit"""
        self.get_salon(salon_id)
        self.repo.increment_view_count(self.db, salon_id)
        return self.get_salon(salon_id)

    def get_salon_by_slug(self, slug: str) -> Salon:
        salon = self.repo.get_salon_by_slug(self.db, slug)
        if not salon:
            raise HTTPException(status_code=404, detail="Salon not found")
        return salon

    def get_my_salon(self, user: User) -> Salon:
        salon = self.repo.get_salon_by_owner(self.db, user.id)
        if not salon:
            raise HTTPException(status_code=404, detail="You do not own a salon")
        return salon

    def update_salon(self, salon_id: int, data: SalonUpdate, user: User) -> Salon:
        salon = self.get_owned_salon(salon_id, user)
        updates = data.column_values()

        new_name = updates.get("business_name")
        if new_name and new_name != salon.business_name:
            updates["slug"] = self._unique_slug(new_name)

        salon = self.repo.update_salon(self.db, salon, **updates)
        logger.info(f"📝 Salon {salon.id} updated: {sorted(updates)}")
        return salon

    def delete_salon(self, salon_id: int, user: User) -> dict:
        salon = self.get_owned_salon(salon_id, user)

        has_bookings = self.db.query(Booking.id).filter(Booking.salon_id == salon.id).first() is not None
        if has_bookings:
            # Booking history keeps its salon; delist instead
            self.repo.update_salon(self.db, salon, is_active=False)
            logger.info(f"🗄️ Salon {salon.id} deactivated (has bookings)")
            return {"message": "Salon deactivated"}

        self.repo.delete_salon(self.db, salon)
        logger.info(f"🗑️ Salon {salon_id} deleted by user {user.id}")
        return {"message": "Salon deleted"}

    def update_verification(self, salon_id: int, data: VerificationUpdate, admin: User) -> Salon:
        salon = self.get_salon(salon_id)
        salon.verification_status = data.status.value
        salon.verification_notes = data.notes
        self.db.commit()
        self.db.refresh(salon)
        logger.info(f"✅ Admin {admin.id} set salon {salon.id} verification to {data.status.value}")
        return salon

    # ============================================================================
    # SERVICES
    # ============================================================================

    def list_services(self, salon_id: int) -> list[Service]:
        self.get_salon(salon_id)
        return self.repo.get_services(self.db, salon_id)

    def create_service(self, salon_id: int, data: ServiceCreate, user: User) -> Service:
        salon = self.get_owned_salon(salon_id, user)
        service = self.repo.create_service(self.db, salon.id, **data.column_values(exclude_unset=False))
        logger.info(f"💇 Service {service.id} added to salon {salon.id}")
        return service

    def _get_salon_service(self, salon_id: int, service_id: int) -> Service:
        service = self.repo.get_service(self.db, service_id, salon_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def update_service(self, salon_id: int, service_id: int, data: ServiceUpdate, user: User) -> Service:
        self.get_owned_salon(salon_id, user)
        service = self._get_salon_service(salon_id, service_id)
        updates = data.column_values()

        price = updates.get("price", service.price)
        discounted = updates.get("discounted_price", service.discounted_price)
        if discounted is not None and discounted >= price:
            raise HTTPException(status_code=400, detail="Discounted price must be lower than the regular price")

        return self.repo.update_service(self.db, service, **updates)

    def delete_service(self, salon_id: int, service_id: int, user: User) -> dict:
        self.get_owned_salon(salon_id, user)
        service = self._get_salon_service(salon_id, service_id)

        if self.db.query(Booking.id).filter(Booking.service_id == service.id).first() is not None:
            self.repo.update_service(self.db, service, is_active=False)
            return {"message": "Service deactivated"}

        self.repo.delete_service(self.db, service)
        return {"message": "Service deleted"}

    # ============================================================================
    # STAFF
    # ============================================================================

    def list_staff(self, salon_id: int) -> list[Staff]:
        self.get_salon(salon_id)
        return self.repo.get_staff(self.db, salon_id)

    def create_staff(self, salon_id: int, data: StaffCreate, user: User) -> Staff:
        salon = self.get_owned_salon(salon_id, user)
        member = self.repo.create_staff(self.db, salon.id, **data.column_values(exclude_unset=False))
        logger.info(f"🧑‍🎨 Staff {member.id} added to salon {salon.id}")
        return member

    def _get_salon_staff(self, salon_id: int, staff_id: int) -> Staff:
        member = self.repo.get_staff_member(self.db, staff_id, salon_id)
        if not member:
            raise HTTPException(status_code=404, detail="Staff member not found")
        return member

    def update_staff(self, salon_id: int, staff_id: int, data: StaffUpdate, user: User) -> Staff:
        self.get_owned_salon(salon_id, user)
        member = self._get_salon_staff(salon_id, staff_id)
        return self.repo.update_staff(self.db, member, **data.column_values())

    def delete_staff(self, salon_id: int, staff_id: int, user: User) -> dict:
        self.get_owned_salon(salon_id, user)
        member = self._get_salon_staff(salon_id, staff_id)

        if self.db.query(Booking.id).filter(Booking.staff_id == member.id).first() is not None:
            self.repo.update_staff(self.db, member, is_active=False, accepts_bookings=False)
            return {"message": "Staff member deactivated"}

        self.repo.delete_staff(self.db, member)
        return {"message": "Staff member deleted"}
