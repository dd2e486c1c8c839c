"""Subscription router - FastAPI endpoints for plans and subscriptions"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import PlanResponse, SubscriptionCancelRequest, SubscriptionCreate, SubscriptionResponse
from .service import SubscriptionService

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


def get_subscription_service(db: Session = Depends(get_db)) -> SubscriptionService:
    """Dependency injection for SubscriptionService"""
    return SubscriptionService(db)


@router.get("/plans", response_model=list[PlanResponse])
async def list_plans(service: SubscriptionService = Depends(get_subscription_service)):
    return service.list_plans()


@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
async def subscribe(
    data: SubscriptionCreate,
    current_user: User = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Start a plan; any active plan for the same audience is cancelled"""
    return service.subscribe(data, current_user)


@router.get("/me", response_model=SubscriptionResponse)
async def my_subscription(
    audience: Optional[Literal["customer", "salon"]] = Query(None),
    current_user: User = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.get_my_subscription(current_user, audience)


@router.patch("/{subscription_id}/cancel", response_model=SubscriptionResponse)
async def cancel_subscription(
    subscription_id: int,
    data: Optional[SubscriptionCancelRequest] = None,
    current_user: User = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.cancel(subscription_id, data or SubscriptionCancelRequest(), current_user)
