"""Portfolio router - FastAPI endpoints for salon portfolios"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...models_engagement import PortfolioCategory
from ...shared.schemas import MessageResponse
from .schemas import PortfolioCreate, PortfolioResponse, PortfolioUpdate
from .service import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["Portfolio"])


def get_portfolio_service(db: Session = Depends(get_db)) -> PortfolioService:
    """Dependency injection for PortfolioService"""
    return PortfolioService(db)


@router.post("", response_model=PortfolioResponse, status_code=status.HTTP_201_CREATED)
async def create_portfolio_item(
    data: PortfolioCreate,
    current_user: User = Depends(get_current_user),
    service: PortfolioService = Depends(get_portfolio_service),
):
    return service.create_item(data, current_user)


@router.get("/salon/{salon_id}", response_model=list[PortfolioResponse])
async def salon_portfolio(
    salon_id: int,
    category: Optional[PortfolioCategory] = Query(None),
    service: PortfolioService = Depends(get_portfolio_service),
):
    return service.get_salon_items(salon_id, category)


@router.get("/{item_id}", response_model=PortfolioResponse)
async def get_portfolio_item(item_id: int, service: PortfolioService = Depends(get_portfolio_service)):
    return service.view_item(item_id)


@router.patch("/{item_id}/like", response_model=PortfolioResponse)
async def like_portfolio_item(
    item_id: int,
    _: User = Depends(get_current_user),
    service: PortfolioService = Depends(get_portfolio_service),
):
    return service.like_item(item_id)


@router.patch("/{item_id}", response_model=PortfolioResponse)
async def update_portfolio_item(
    item_id: int,
    data: PortfolioUpdate,
    current_user: User = Depends(get_current_user),
    service: PortfolioService = Depends(get_portfolio_service),
):
    return service.update_item(item_id, data, current_user)


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_portfolio_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    service: PortfolioService = Depends(get_portfolio_service),
):
    service.delete_item(item_id, current_user)
    return {"message": "Portfolio item deleted successfully"}
