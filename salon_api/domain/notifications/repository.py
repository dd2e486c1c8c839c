"""Notification repository - Database operations for notifications"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models_engagement import Notification, NotificationStatus
from ...shared.dates import utcnow


class NotificationRepository:
    """Repository for notification database operations"""

    @staticmethod
    def add_notification(db: Session, **notification_data) -> Notification:
        """Stage a notification; the caller's transaction commits it"""
        notification = Notification(**notification_data)
        db.add(notification)
        return notification

    @staticmethod
    def get_notifications(db: Session, user_id: int, unread_only: bool = False) -> list[Notification]:
        query = db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.read_at.is_(None))
        return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()

    @staticmethod
    def get_notification(db: Session, notification_id: int, user_id: int) -> Optional[Notification]:
        return (
            db.query(Notification)
            .filter(Notification.id == notification_id, Notification.user_id == user_id)
            .first()
        )

    @staticmethod
    def count_unread(db: Session, user_id: int) -> int:
        return (
            db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read_at.is_(None))
            .count()
        )

    @staticmethod
    def mark_all_read(db: Session, user_id: int) -> int:
        now = utcnow()
        updated = (
            db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read_at.is_(None))
            .update(
                {Notification.read_at: now, Notification.status: NotificationStatus.READ.value},
                synchronize_session=False,
            )
        )
        db.commit()
        return updated
