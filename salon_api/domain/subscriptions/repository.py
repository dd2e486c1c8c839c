"""Subscription repository - Database operations for subscriptions"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models_billing import Subscription, SubscriptionStatus


class SubscriptionRepository:
    """Repository for subscription database operations"""

    @staticmethod
    def get_subscription(db: Session, subscription_id: int) -> Optional[Subscription]:
        return db.query(Subscription).filter(Subscription.id == subscription_id).first()

    @staticmethod
    def get_active_subscriptions(db: Session, user_id: int, types: Optional[list[str]] = None) -> list[Subscription]:
        query = db.query(Subscription).filter(
            Subscription.user_id == user_id,
            Subscription.status == SubscriptionStatus.ACTIVE.value,
        )
        if types:
            query = query.filter(Subscription.type.in_(types))
        return query.order_by(Subscription.created_at.desc(), Subscription.id.desc()).all()

    @staticmethod
    def add_subscription(db: Session, **subscription_data) -> Subscription:
        """Stage a subscription; the caller commits together with the tier change"""
        subscription = Subscription(**subscription_data)
        db.add(subscription)
        return subscription
