"""Salon router - FastAPI endpoints for salons, services and staff"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_admin
from ...database import get_db
from ...models import User
from ...models_salon import GenderSpecialization
from ...shared.schemas import MessageResponse
from .schemas import (
    NearbySalonResponse,
    SalonCreate,
    SalonDetailResponse,
    SalonResponse,
    SalonUpdate,
    ServiceCreate,
    ServiceResponse,
    ServiceUpdate,
    StaffCreate,
    StaffResponse,
    StaffUpdate,
    VerificationUpdate,
)
from .service import SalonService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/salons", tags=["Salons"])


def get_salon_service(db: Session = Depends(get_db)) -> SalonService:
    """Dependency injection for SalonService"""
    return SalonService(db)


# ============================================================================
# SALONS
# ============================================================================


@router.post("", response_model=SalonDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_salon(
    data: SalonCreate,
    current_user: User = Depends(get_current_user),
    service: SalonService = Depends(get_salon_service),
):
    """Register the caller's salon; it stays unlisted until an admin verifies it"""
    return service.create_salon(data, current_user)


@router.get("", response_model=list[SalonResponse])
async def list_salons(
    city: Optional[str] = Query(None),
    gender: Optional[GenderSpecialization] = Query(None),
    min_rating: Optional[float] = Query(None, alias="minRating", ge=0, le=5),
    search: Optional[str] = Query(None),
    service: SalonService = Depends(get_salon_service),
):
    return service.list_salons(city, gender.value if gender else None, min_rating, search)


@router.get("/nearby", response_model=list[NearbySalonResponse])
async def nearby_salons(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius: Optional[float] = Query(None, gt=0, description="Search radius in kilometres (default 10)"),
    service: SalonService = Depends(get_salon_service),
):
    return service.search_nearby(lat, lng, radius)


@router.get("/slug/{slug}", response_model=SalonDetailResponse)
async def get_salon_by_slug(slug: str, service: SalonService = Depends(get_salon_service)):
    return service.get_salon_by_slug(slug)


@router.get("/my-salon", response_model=SalonDetailResponse)
async def get_my_salon(
    current_user: User = Depends(get_current_user),
    service: SalonService = Depends(get_salon_service),
):
    return service.get_my_salon(current_user)


@router.get("/{salon_id}", response_model=SalonDetailResponse)
async def get_salon(salon_id: int, service: SalonService = Depends(get_salon_service)):
    return service.view_salon(salon_id)


@router.patch("/{salon_id}", response_model=SalonDetailResponse)
async def update_salon(
    salon_id: int,
    data: SalonUpdate,
    current_user: User = Depends(get_current_user),
    service: SalonService = Depends(get_salon_service),
):
    return service.update_salon(salon_id, data, current_user)


@router.delete("/{salon_id}", response_model=MessageResponse)
async def delete_salon(
    salon_id: int,
    current_user: User = Depends(get_current_user),
    service: SalonService = Depends(get_salon_service),
):
    return service.delete_salon(salon_id, current_user)


@router.patch("/{salon_id}/verification", response_model=SalonResponse)
async def update_verification(
    salon_id: int,
    data: VerificationUpdate,
    current_user: User = Depends(require_admin),
    service: SalonService = Depends(get_salon_service),
):
    return service.update_verification(salon_id, data, current_user)


# ============================================================================
# SERVICES
# ============================================================================


@router.get("/{salon_id}/services", response_model=list[ServiceResponse])
async def list_services(salon_id: int, service: SalonService = Depends(get_salon_service)):
    return service.list_services(salon_id)


@router.post("/{salon_id}/services", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
    salon_id: int,
    data: ServiceCreate,
    current_user: User = Depends(get_current_user),
    service: SalonService = Depends(get_salon_service),
):
    return service.create_service(salon_id, data, current_user)


@router.patch("/{salon_id}/services/{service_id}", response_model=ServiceResponse)
async def update_service(
    salon_id: int,
    service_id: int,
    data: ServiceUpdate,
    current_user: User = Depends(get_current_user),
    service: SalonService = Depends(get_salon_service),
):
    return service.update_service(salon_id, service_id, data, current_user)


@router.delete("/{salon_id}/services/{service_id}", response_model=MessageResponse)
async def delete_service(
    salon_id: int,
    service_id: int,
    current_user: User = Depends(get_current_user),
    service: SalonService = Depends(get_salon_service),
):
    return service.delete_service(salon_id, service_id, current_user)


# ============================================================================
# STAFF
# ============================================================================


@router.get("/{salon_id}/staff", response_model=list[StaffResponse])
async def list_staff(salon_id: int, service: SalonService = Depends(get_salon_service)):
    return service.list_staff(salon_id)


@router.post("/{salon_id}/staff", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
async def create_staff(
    salon_id: int,
    data: StaffCreate,
    current_user: User = Depends(get_current_user),
    service: SalonService = Depends(get_salon_service),
):
    return service.create_staff(salon_id, data, current_user)


@router.patch("/{salon_id}/staff/{staff_id}", response_model=StaffResponse)
async def update_staff(
    salon_id: int,
    staff_id: int,
    data: StaffUpdate,
    current_user: User = Depends(get_current_user),
    service: SalonService = Depends(get_salon_service),
):
    return service.update_staff(salon_id, staff_id, data, current_user)


@router.delete("/{salon_id}/staff/{staff_id}", response_model=MessageResponse)
async def delete_staff(
    salon_id: int,
    staff_id: int,
    current_user: User = Depends(get_current_user),
    service: SalonService = Depends(get_salon_service),
):
    return service.delete_staff(salon_id, staff_id, current_user)
