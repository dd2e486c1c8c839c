"""Promotion router - FastAPI endpoints for salon promotions"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.schemas import MessageResponse
from .schemas import (
    PromotionCreate,
    PromotionResponse,
    PromotionUpdate,
    PromotionValidateRequest,
    PromotionValidationResponse,
)
from .service import PromotionService

router = APIRouter(prefix="/promotions", tags=["Promotions"])


def get_promotion_service(db: Session = Depends(get_db)) -> PromotionService:
    """Dependency injection for PromotionService"""
    return PromotionService(db)


@router.post("", response_model=PromotionResponse, status_code=status.HTTP_201_CREATED)
async def create_promotion(
    data: PromotionCreate,
    current_user: User = Depends(get_current_user),
    service: PromotionService = Depends(get_promotion_service),
):
    return service.create_promotion(data, current_user)


@router.get("/salon/{salon_id}", response_model=list[PromotionResponse])
async def salon_promotions(salon_id: int, service: PromotionService = Depends(get_promotion_service)):
    return service.get_salon_promotions(salon_id)


@router.post("/validate", response_model=PromotionValidationResponse)
async def validate_promotion(
    data: PromotionValidateRequest,
    current_user: User = Depends(get_current_user),
    service: PromotionService = Depends(get_promotion_service),
):
    """Check a code against a service and amount; the code is not redeemed"""
    return service.validate_code(data, current_user)


@router.patch("/{promotion_id}", response_model=PromotionResponse)
async def update_promotion(
    promotion_id: int,
    data: PromotionUpdate,
    current_user: User = Depends(get_current_user),
    service: PromotionService = Depends(get_promotion_service),
):
    return service.update_promotion(promotion_id, data, current_user)


@router.delete("/{promotion_id}", response_model=MessageResponse)
async def delete_promotion(
    promotion_id: int,
    current_user: User = Depends(get_current_user),
    service: PromotionService = Depends(get_promotion_service),
):
    service.delete_promotion(promotion_id, current_user)
    return {"message": "Promotion deleted successfully"}
