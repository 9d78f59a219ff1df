"""
Notification service - emitter used by the social graph plus the recipient-side
read operations
"""
from typing import List
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.notification import Notification, NotificationType
from app.schemas.notification import NotificationResponse

logger = logging.getLogger(__name__)

FRIEND_REQUEST_MESSAGE = "You have a new friend request"
FRIEND_ACCEPTED_MESSAGE = "Your friend request was accepted"
NEW_MESSAGE_MESSAGE = "You have a new message"


class NotificationService:
    """Append-only sink for notifications and the recipient's view of them"""

    def emit(
        self,
        db: Session,
        user_id: int,
        notification_type: NotificationType,
        message: str
    ) -> Notification:
        """
        Append one notification for user_id.

        No deduplication. Storage errors propagate; callers that treat the
        notification as best-effort use emit_best_effort instead.
        """
        notification = Notification(
            user_id=user_id,
            type=NotificationType(notification_type).value,
            message=message,
            is_read=False
        )
        db.add(notification)
        db.commit()
        db.refresh(notification)
        return notification

    def emit_best_effort(
        self,
        db: Session,
        user_id: int,
        notification_type: NotificationType,
        message: str
    ) -> bool:
        """
        Emit after the caller's own mutation has been committed.

        A failure is logged and rolled back; it never undoes or fails the
        mutation the notification describes.
        """
        try:
            self.emit(db, user_id, notification_type, message)
            return True
        except Exception:
            db.rollback()
            logger.error(
                f"Failed to emit {NotificationType(notification_type).value} notification to user {user_id}",
                exc_info=True
            )
            return False

    def list_for_user(self, db: Session, user_id: int) -> List[NotificationResponse]:
        """Notifications for user_id, newest first"""
        notifications = db.query(Notification).filter(
            Notification.user_id == user_id
        ).order_by(Notification.created_at.desc(), Notification.id.desc()).all()
        return [NotificationResponse.model_validate(n) for n in notifications]

    def unread_count(self, db: Session, user_id: int) -> int:
        return db.query(Notification).filter(
            Notification.user_id == user_id,
            Notification.is_read.is_(False)
        ).count()

    def mark_read(self, db: Session, user_id: int, notification_id: int) -> Notification:
        """Mark one of the caller's notifications as read"""
        notification = db.query(Notification).filter(
            Notification.id == notification_id,
            Notification.user_id == user_id
        ).first()

        if not notification:
            raise NotFoundError("Notification not found")

        notification.is_read = True
        db.commit()
        db.refresh(notification)
        return notification

    def mark_all_read(self, db: Session, user_id: int) -> int:
        """Mark every unread notification of the caller as read; returns how many changed"""
        updated = db.query(Notification).filter(
            Notification.user_id == user_id,
            Notification.is_read.is_(False)
        ).update({Notification.is_read: True}, synchronize_session=False)
        db.commit()
        return updated


notification_service = NotificationService()
