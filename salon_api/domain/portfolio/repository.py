"""Portfolio repository - Database operations for salon portfolio items"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models_engagement import Portfolio


class PortfolioRepository:
    """Repository for portfolio database operations"""

    @staticmethod
    def get_item(db: Session, item_id: int) -> Optional[Portfolio]:
        return db.query(Portfolio).filter(Portfolio.id == item_id).first()

    @staticmethod
    def get_salon_items(db: Session, salon_id: int, category: Optional[str] = None) -> list[Portfolio]:
        query = db.query(Portfolio).filter(Portfolio.salon_id == salon_id, Portfolio.is_visible.is_(True))
        if category:
            query = query.filter(Portfolio.category == category)
        return query.order_by(Portfolio.is_featured.desc(), Portfolio.sort_order.asc(), Portfolio.id.asc()).all()

    @staticmethod
    def create_item(db: Session, salon_id: int, **item_data) -> Portfolio:
        item = Portfolio(salon_id=salon_id, **item_data)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def update_item(db: Session, item: Portfolio, **updates) -> Portfolio:
        for key, value in updates.items():
            if value is not None and hasattr(item, key):
                setattr(item, key, value)

        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def delete_item(db: Session, item: Portfolio) -> None:
        db.delete(item)
        db.commit()

    @staticmethod
    def increment_counter(db: Session, item_id: int, column: str) -> None:
        counter = getattr(Portfolio, column)
        db.query(Portfolio).filter(Portfolio.id == item_id).update({counter: counter + 1}, synchronize_session=False)
        db.commit()
