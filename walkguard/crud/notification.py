from datetime import datetime
from typing import List, Optional
from sqlalchemy import desc, func
from sqlalchemy.orm import Session
from walkguard.crud.base import CRUDBase
from walkguard.models.notification import Notification
from walkguard.schemas.notification import NotificationCreate


class CRUDNotification(CRUDBase[Notification, NotificationCreate, NotificationCreate]):

    def create_batch(self, db: Session, *, items: List[NotificationCreate]) -> List[Notification]:
        """Persist a batch of notifications in one transaction"""
        if not items:
            return []

        db_objs = [Notification(**item.model_dump()) for item in items]
        db.add_all(db_objs)
        db.commit()
        return db_objs

    def get_user_notifications(
        self,
        db: Session,
        *,
        user_id: int,
        unread_only: bool = False,
        limit: int = 50
    ) -> List[Notification]:
        """Newest first"""
        query = db.query(Notification).filter(Notification.recipient_user_id == user_id)
        if unread_only:
            query = query.filter(Notification.is_read.is_(False))
        return query.order_by(desc(Notification.created_at), desc(Notification.id)).limit(limit).all()

    def count_unread(self, db: Session, *, user_id: int) -> int:
        return db.query(func.count(Notification.id)).filter(
            Notification.recipient_user_id == user_id,
            Notification.is_read.is_(False)
        ).scalar()

    def mark_as_read(
        self,
        db: Session,
        *,
        notification_id: int,
        user_id: int,
        read_at: datetime
    ) -> Optional[Notification]:
        notification = db.query(Notification).filter(
            Notification.id == notification_id,
            Notification.recipient_user_id == user_id
        ).first()

        if notification and not notification.is_read:
            notification.is_read = True
            notification.read_at = read_at
            db.commit()
            db.refresh(notification)

        return notification

    def mark_all_as_read(self, db: Session, *, user_id: int, read_at: datetime) -> int:
        """Mark every unread notification of a user as read, returns how many changed"""
        result = db.query(Notification).filter(
            Notification.recipient_user_id == user_id,
            Notification.is_read.is_(False)
        ).update({
            "is_read": True,
            "read_at": read_at
        }, synchronize_session=False)

        db.commit()
        return result


notification = CRUDNotification(Notification)
