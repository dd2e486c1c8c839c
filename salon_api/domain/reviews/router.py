"""Review router - FastAPI endpoints for salon reviews"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import ReviewCreate, ReviewRespondRequest, ReviewResponse
from .service import ReviewService

router = APIRouter(prefix="/reviews", tags=["Reviews"])


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    """Dependency injection for ReviewService"""
    return ReviewService(db)


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    return service.create_review(data, current_user)


@router.get("/salon/{salon_id}", response_model=list[ReviewResponse])
async def salon_reviews(salon_id: int, service: ReviewService = Depends(get_review_service)):
    return service.get_salon_reviews(salon_id)


@router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: int, service: ReviewService = Depends(get_review_service)):
    return service.get_review(review_id)


@router.patch("/{review_id}/respond", response_model=ReviewResponse)
async def respond_to_review(
    review_id: int,
    data: ReviewRespondRequest,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    return service.respond(review_id, data, current_user)


@router.patch("/{review_id}/helpful", response_model=ReviewResponse)
async def mark_helpful(
    review_id: int,
    _: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    return service.mark_helpful(review_id)
