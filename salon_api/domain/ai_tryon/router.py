"""AI try-on router - FastAPI endpoints for virtual hairstyle try-on"""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_admin
from ...database import get_db
from ...models import User
from ...models_tryon import HairstyleCategory, HairstyleGender
from .schemas import (
    HairstyleCreate,
    HairstyleResponse,
    SharedTryOnResponse,
    ShareResponse,
    TryOnCreate,
    TryOnSessionResponse,
)
from .service import TryOnService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai-tryon", tags=["AI Try-On"])


def get_tryon_service(db: Session = Depends(get_db)) -> TryOnService:
    """Dependency injection for TryOnService"""
    return TryOnService(db)


@router.post("", response_model=TryOnSessionResponse, status_code=status.HTTP_201_CREATED)
async def create_tryon(
    data: TryOnCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    service: TryOnService = Depends(get_tryon_service),
):
    """
    Start a try-on. Consumes one try-on from the caller's allowance and returns
    the pending session immediately; poll GET /ai-tryon/{id} for the result.
    """
    session = service.create_session(data, current_user)
    await service.dispatch_processing(session.id, background_tasks)
    return session


@router.get("/my-sessions", response_model=list[TryOnSessionResponse])
async def my_sessions(
    current_user: User = Depends(get_current_user),
    service: TryOnService = Depends(get_tryon_service),
):
    return service.get_user_sessions(current_user)


@router.get("/hairstyles", response_model=list[HairstyleResponse])
async def list_hairstyles(
    category: Optional[HairstyleCategory] = Query(None),
    gender: Optional[HairstyleGender] = Query(None),
    is_premium: Optional[bool] = Query(None, alias="isPremium"),
    service: TryOnService = Depends(get_tryon_service),
):
    return service.list_hairstyles(
        category.value if category else None, gender.value if gender else None, is_premium
    )


@router.post("/hairstyles", response_model=HairstyleResponse, status_code=status.HTTP_201_CREATED)
async def create_hairstyle(
    data: HairstyleCreate,
    current_user: User = Depends(require_admin),
    service: TryOnService = Depends(get_tryon_service),
):
    return service.create_hairstyle(data, current_user)


@router.get("/shared/{share_token}", response_model=SharedTryOnResponse)
async def view_shared(share_token: str, service: TryOnService = Depends(get_tryon_service)):
    """Public view of a shared try-on; each call counts as a view"""
    return service.view_shared_session(share_token)


@router.get("/{session_id}", response_model=TryOnSessionResponse)
async def get_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    service: TryOnService = Depends(get_tryon_service),
):
    return service.get_session(session_id, current_user)


@router.patch("/{session_id}/save", response_model=TryOnSessionResponse)
async def save_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    service: TryOnService = Depends(get_tryon_service),
):
    return service.save_session(session_id, current_user)


@router.post("/{session_id}/share", response_model=ShareResponse)
async def share_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    service: TryOnService = Depends(get_tryon_service),
):
    return service.share_session(session_id, current_user)
