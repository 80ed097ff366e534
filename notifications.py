import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db, Notification, User
from schemas import (
    MarkAllRead,
    NotificationCreate,
    NotificationOut,
    NotificationUpdated,
    UnreadCount,
)

logger = logging.getLogger(__name__)

notification_router = APIRouter()

NOTIFICATION_LIST_LIMIT = 50


def notify(db: Session, user_id: int, message: str, type_: str) -> Notification:
    """Stage a notification in the caller's session; the caller commits."""
    notification = Notification(user_id=user_id, message=message, type=type_)
    db.add(notification)
    return notification


def clear_notifications(db: Session) -> int:
    deleted = db.query(Notification).delete()
    db.commit()
    return deleted


@notification_router.get("", response_model=list[NotificationOut])
async def get_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return (
        db.query(Notification)
        .filter(Notification.user_id == current_user.id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(NOTIFICATION_LIST_LIMIT)
        .all()
    )


@notification_router.post(
    "", response_model=NotificationOut, status_code=status.HTTP_201_CREATED
)
async def create_notification(
    notification: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not notification.message or not notification.type:
        raise HTTPException(status_code=400, detail="Message and type are required")

    db_notification = notify(
        db, current_user.id, notification.message, notification.type
    )
    db.commit()
    db.refresh(db_notification)
    return db_notification


@notification_router.get("/unread-count", response_model=UnreadCount)
async def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    count = (
        db.query(Notification)
        .filter(
            Notification.user_id == current_user.id,
            Notification.is_read.is_(False),
        )
        .count()
    )
    return {"unread_count": count}


@notification_router.put("/mark-all-read", response_model=MarkAllRead)
async def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    updated = (
        db.query(Notification)
        .filter(
            Notification.user_id == current_user.id,
            Notification.is_read.is_(False),
        )
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    db.commit()
    return {"message": "All notifications marked as read", "updated_count": updated}


@notification_router.put("/{notification_id}/read", response_model=NotificationUpdated)
async def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    notification = (
        db.query(Notification)
        .filter(
            Notification.id == notification_id,
            Notification.user_id == current_user.id,
        )
        .first()
    )
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")

    notification.is_read = True
    db.commit()
    db.refresh(notification)
    return {"message": "Notification marked as read", "notification": notification}
