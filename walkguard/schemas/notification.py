from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel
from walkguard.models.notification import NotificationType
from walkguard.schemas.base import CamelModel


class NotificationCreate(BaseModel):
    recipient_user_id: int
    notification_type: NotificationType
    title: str
    message: str
    walk_session_id: Optional[int] = None
    is_read: bool = False
    extra_data: Optional[Dict[str, Any]] = None


class Notification(CamelModel):
    id: int
    type: NotificationType
    title: str
    message: str
    is_read: bool
    metadata: Optional[Dict[str, Any]] = None
    created_at: datetime
    read_at: Optional[datetime] = None
    walk_id: Optional[int] = None

    @classmethod
    def from_model(cls, notification) -> "Notification":
        return cls(
            id=notification.id,
            type=notification.notification_type,
            title=notification.title,
            message=notification.message,
            is_read=notification.is_read,
            metadata=notification.extra_data,
            created_at=notification.created_at,
            read_at=notification.read_at,
            walk_id=notification.walk_session_id,
        )


class NotificationList(CamelModel):
    notifications: List[Notification]
    unread_count: int


class NotificationRead(CamelModel):
    id: int
    is_read: bool


class NotificationsMarkedRead(CamelModel):
    message: str = "All notifications marked as read"
    updated: int
