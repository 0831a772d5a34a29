from sqlalchemy import Column, String, Boolean, DateTime, Text, Integer, ForeignKey, Enum, JSON, Index
from walkguard.models.base import BaseModel
import enum


class NotificationType(enum.Enum):
    PANIC = "panic"
    WALK_STARTED = "walk_started"
    WALK_ENDED = "walk_ended"
    CHECK_IN = "check_in"
    REPORT = "report"
    SYSTEM = "system"


class Notification(BaseModel):
    __tablename__ = "notifications"
    __table_args__ = (
        Index("idx_notifications_recipient_read", "recipient_user_id", "is_read"),
        Index("idx_notifications_recipient_created", "recipient_user_id", "created_at"),
    )

    recipient_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    notification_type = Column(
        Enum(NotificationType, name="notificationtype", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    # Informational only, no foreign key
    walk_session_id = Column(Integer, nullable=True)
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime(timezone=True), nullable=True)
    extra_data = Column(JSON, nullable=True)  # location, userName, walkSessionId
