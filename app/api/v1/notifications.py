"""
Notification management endpoints
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.dependencies import get_current_user_id
from app.schemas.notification import (
    NotificationActionResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from app.services.notification_service import notification_service

router = APIRouter(prefix="/notifications")


@router.get("", response_model=List[NotificationResponse])
async def get_notifications(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Current user's notifications, newest first"""
    return notification_service.list_for_user(db, current_user_id)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    return UnreadCountResponse(count=notification_service.unread_count(db, current_user_id))


@router.put("/read-all", response_model=NotificationActionResponse)
async def mark_all_as_read(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Mark all notifications as read"""
    updated = notification_service.mark_all_read(db, current_user_id)
    return NotificationActionResponse(
        success=True,
        message="All notifications marked as read",
        updated=updated
    )


@router.put("/{notification_id}/read", response_model=NotificationActionResponse)
async def mark_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Mark one notification as read"""
    notification_service.mark_read(db, current_user_id, notification_id)
    return NotificationActionResponse(
        success=True,
        message="Notification marked as read",
        updated=1
    )
