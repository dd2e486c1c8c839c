"""Portfolio service - before/after showcase items for salons"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User
from ...models_engagement import Portfolio, PortfolioCategory
from ..salons.repository import SalonRepository
from .repository import PortfolioRepository
from .schemas import PortfolioCreate, PortfolioUpdate

logger = logging.getLogger(__name__)


class PortfolioService:
    """Service layer for portfolio business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PortfolioRepository()
        self.salon_repo = SalonRepository()

    def _owned_item(self, item_id: int, user: User) -> Portfolio:
        item = self.repo.get_item(self.db, item_id)
        if not item:
            raise HTTPException(status_code=404, detail="Portfolio item not found")
        if item.salon.owner_id != user.id:
            raise HTTPException(status_code=403, detail="You can only manage your own salon's portfolio")
        return item

    def create_item(self, data: PortfolioCreate, user: User) -> Portfolio:
        salon = self.salon_repo.get_salon_by_owner(self.db, user.id)
        if not salon:
            raise HTTPException(status_code=403, detail="Only salon owners can add portfolio items")

        if data.staff_id is not None and not self.salon_repo.get_staff_member(self.db, data.staff_id, salon.id):
            raise HTTPException(status_code=404, detail="Staff member not found")
        if data.service_id is not None and not self.salon_repo.get_service(self.db, data.service_id, salon.id):
            raise HTTPException(status_code=404, detail="Service not found")

        item = self.repo.create_item(self.db, salon.id, **data.column_values(exclude_unset=False))
        logger.info(f"🖼️ Portfolio item {item.id} added to salon {salon.id}")
        return item

    def get_salon_items(self, salon_id: int, category: Optional[PortfolioCategory] = None) -> list[Portfolio]:
        return self.repo.get_salon_items(self.db, salon_id, category.value if category else None)

    def view_item(self, item_id: int) -> Portfolio:
        item = self.repo.get_item(self.db, item_id)
        if not item or not item.is_visible:
            raise HTTPException(status_code=404, detail="Portfolio item not found")
        self.repo.increment_counter(self.db, item.id, "view_count")
        self.db.refresh(item)
        return item

    def like_item(self, item_id: int) -> Portfolio:
        item = self.repo.get_item(self.db, item_id)
        if not item or not item.is_visible:
            raise HTTPException(status_code=404, detail="Portfolio item not found")
        self.repo.increment_counter(self.db, item.id, "like_count")
        self.db.refresh(item)
        return item

    def update_item(self, item_id: int, data: PortfolioUpdate, user: User) -> Portfolio:
        item = self._owned_item(item_id, user)
        return self.repo.update_item(self.db, item, **data.column_values())

    def delete_item(self, item_id: int, user: User) -> None:
        item = self._owned_item(item_id, user)
        self.repo.delete_item(self.db, item)
        logger.info(f"🗑️ Portfolio item {item_id} deleted by user {user.id}")
