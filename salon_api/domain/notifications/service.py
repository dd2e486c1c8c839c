"""
Notification service - records user-facing notifications.

Only the in-app channel is delivered here (the record itself is the delivery);
other channels are stored as pending for an external sender.
"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User
from ...models_booking import Booking
from ...models_engagement import (
    Notification,
    NotificationChannel,
    NotificationStatus,
    NotificationType,
)
from ...shared.dates import utcnow
from .repository import NotificationRepository

logger = logging.getLogger(__name__)

BOOKING_MESSAGES = {
    NotificationType.BOOKING_CONFIRMATION: (
        "Booking received",
        "Your booking {reference} on {date} at {time} has been received.",
    ),
    NotificationType.BOOKING_CANCELLED: (
        "Booking cancelled",
        "Your booking {reference} on {date} at {time} has been cancelled.",
    ),
    NotificationType.BOOKING_RESCHEDULED: (
        "Booking rescheduled",
        "Your booking {reference} has been moved to {date} at {time}.",
    ),
    NotificationType.BOOKING_COMPLETED: (
        "Thanks for visiting",
        "Your booking {reference} is complete. Tell others how it went with a review.",
    ),
}


class NotificationService:
    """Service layer for notifications"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository()

    def notify(
        self,
        user_id: int,
        notification_type: NotificationType,
        title: str,
        message: str,
        data: Optional[dict] = None,
        channel: NotificationChannel = NotificationChannel.IN_APP,
    ) -> Notification:
        """Stage a notification in the current transaction"""
        delivered = channel == NotificationChannel.IN_APP
        notification = self.repo.add_notification(
            self.db,
            user_id=user_id,
            type=notification_type.value,
            channel=channel.value,
            title=title,
            message=message,
            data=data,
            status=NotificationStatus.SENT.value if delivered else NotificationStatus.PENDING.value,
            sent_at=utcnow() if delivered else None,
        )
        logger.info(f"🔔 {notification_type.value} notification queued for user {user_id} via {channel.value}")
        return notification

    def notify_booking_event(self, booking: Booking, notification_type: NotificationType) -> Notification:
        title, template = BOOKING_MESSAGES[notification_type]
        message = template.format(
            reference=booking.booking_reference,
            date=booking.appointment_date.isoformat(),
            time=booking.appointment_time,
        )
        return self.notify(
            booking.customer_id,
            notification_type,
            title,
            message,
            data={"bookingId": booking.id, "salonId": booking.salon_id, "reference": booking.booking_reference},
        )

    def list_notifications(self, user: User, unread_only: bool = False) -> list[Notification]:
        return self.repo.get_notifications(self.db, user.id, unread_only)

    def unread_count(self, user: User) -> dict:
        return {"unread": self.repo.count_unread(self.db, user.id)}

    def mark_read(self, notification_id: int, user: User) -> Notification:
        notification = self.repo.get_notification(self.db, notification_id, user.id)
        if not notification:
            raise HTTPException(status_code=404, detail="Notification not found")

        if notification.read_at is None:
            notification.read_at = utcnow()
            notification.status = NotificationStatus.READ.value
            self.db.commit()
            self.db.refresh(notification)
        return notification

    def mark_all_read(self, user: User) -> dict:
        return {"updated": self.repo.mark_all_read(self.db, user.id)}
