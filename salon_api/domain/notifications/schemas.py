"""Notification domain schemas"""

from datetime import datetime
from typing import Optional

from ...models_engagement import NotificationChannel, NotificationStatus, NotificationType
from ...shared.schemas import CamelModel


class NotificationResponse(CamelModel):
    id: int
    user_id: int
    type: NotificationType
    channel: NotificationChannel
    title: str
    message: str
    data: Optional[dict] = None
    status: NotificationStatus
    scheduled_for: Optional[datetime] = None
    sent_at: Optional[datetime] = None
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class UnreadCountResponse(CamelModel):
    unread: int


class MarkAllReadResponse(CamelModel):
    updated: int
