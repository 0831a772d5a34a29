from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from walkguard import crud, schemas
from walkguard.api import deps
from walkguard.core.clock import utcnow
from walkguard.core.config import settings
from walkguard.db.database import get_db
from walkguard.models.user import User

router = APIRouter()


@router.get("/", response_model=schemas.NotificationList)
def get_my_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
    unread_only: bool = Query(False, alias="unreadOnly", description="Get only unread notifications"),
    limit: Optional[int] = Query(None),
) -> Any:
    """Get current user's notifications, newest first"""
    if limit is None:
        limit = settings.NOTIFICATION_PAGE_LIMIT
    limit = max(1, min(limit, settings.NOTIFICATION_MAX_LIMIT))

    notifications = crud.notification.get_user_notifications(
        db,
        user_id=current_user.id,
        unread_only=unread_only,
        limit=limit
    )
    return schemas.NotificationList(
        notifications=[schemas.Notification.from_model(n) for n in notifications],
        unread_count=crud.notification.count_unread(db, user_id=current_user.id),
    )


@router.patch("/read-all", response_model=schemas.NotificationsMarkedRead)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """Mark all notifications as read"""
    updated = crud.notification.mark_all_as_read(db, user_id=current_user.id, read_at=utcnow())
    return schemas.NotificationsMarkedRead(updated=updated)


@router.patch("/{notification_id}/read", response_model=schemas.NotificationRead)
def mark_notification_read(
    *,
    db: Session = Depends(get_db),
    notification_id: int,
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """Mark a notification as read"""
    notification = crud.notification.mark_as_read(
        db,
        notification_id=notification_id,
        user_id=current_user.id,
        read_at=utcnow()
    )
    if not notification:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found"
        )
    return schemas.NotificationRead(id=notification.id, is_read=notification.is_read)
