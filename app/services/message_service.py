"""
Direct messaging between friends
"""
from typing import Dict, List
import logging

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.models.message import Message
from app.models.notification import NotificationType
from app.models.user import User
from app.schemas.message import ConversationResponse, MessageResponse
from app.schemas.user import UserSummary
from app.services.access_gate import access_gate
from app.services.friendship_store import friendship_store
from app.services.notification_service import notification_service, NEW_MESSAGE_MESSAGE

logger = logging.getLogger(__name__)


def _between(user_a: int, user_b: int):
    return or_(
        and_(Message.sender_id == user_a, Message.receiver_id == user_b),
        and_(Message.sender_id == user_b, Message.receiver_id == user_a)
    )


def _project(message: Message, viewer_id: int) -> MessageResponse:
    return MessageResponse(
        id=message.id,
        content=message.content or "",
        is_sender=message.sender_id == viewer_id,
        is_read=message.is_read,
        created_at=message.created_at
    )


class MessageService:
    """Messaging gated on an accepted friendship"""

    def send_message(
        self,
        db: Session,
        user_id: int,
        receiver_id: int,
        content: str
    ) -> MessageResponse:
        if not content or not content.strip():
            raise ValidationError("Message content cannot be empty")

        access_gate.require_connection(db, user_id, receiver_id)

        message = Message(
            sender_id=user_id,
            receiver_id=receiver_id,
            content=content,
            is_read=False
        )
        db.add(message)
        db.commit()
        db.refresh(message)

        logger.info(f"Message {message.id} sent: {user_id} -> {receiver_id}")

        response = _project(message, user_id)
        notification_service.emit_best_effort(
            db, receiver_id, NotificationType.MESSAGE, NEW_MESSAGE_MESSAGE
        )
        return response

    def get_conversation(self, db: Session, user_id: int, other_user_id: int) -> List[MessageResponse]:
        """
        Messages between the two users, oldest first. Messages received by
        user_id are marked read; the returned list shows them as they were
        before this read.
        """
        access_gate.require_connection(db, user_id, other_user_id)

        messages = db.query(Message).filter(
            _between(user_id, other_user_id)
        ).order_by(Message.created_at, Message.id).all()
        result = [_project(m, user_id) for m in messages]

        marked = db.query(Message).filter(
            Message.sender_id == other_user_id,
            Message.receiver_id == user_id,
            Message.is_read.is_(False)
        ).update({Message.is_read: True}, synchronize_session=False)
        db.commit()

        if marked:
            logger.debug(f"Marked {marked} messages from {other_user_id} read for {user_id}")
        return result

    def get_conversations(self, db: Session, user_id: int) -> List[ConversationResponse]:
        """Everyone the caller has messaged with plus all current friends"""
        partner_rows = db.query(Message.sender_id, Message.receiver_id).filter(
            or_(Message.sender_id == user_id, Message.receiver_id == user_id)
        ).all()
        contact_ids: List[int] = []
        for sender_id, receiver_id in partner_rows:
            other = receiver_id if sender_id == user_id else sender_id
            if other not in contact_ids:
                contact_ids.append(other)

        friend_ids = friendship_store.connected_user_ids(db, user_id, accepted_only=True)
        for friend_id in sorted(friend_ids):
            if friend_id not in contact_ids:
                contact_ids.append(friend_id)

        if not contact_ids:
            return []

        users: Dict[int, User] = {
            u.id: u for u in db.query(User).filter(User.id.in_(contact_ids)).all()
        }

        conversations = []
        for contact_id in contact_ids:
            contact = users.get(contact_id)
            if not contact:
                continue

            latest = db.query(Message).filter(
                _between(user_id, contact_id)
            ).order_by(Message.created_at.desc(), Message.id.desc()).first()

            unread_count = db.query(Message).filter(
                Message.sender_id == contact_id,
                Message.receiver_id == user_id,
                Message.is_read.is_(False)
            ).count()

            conversations.append(ConversationResponse(
                user=UserSummary.from_user(contact),
                last_message=_project(latest, user_id) if latest else None,
                unread_count=unread_count,
                is_friend=contact_id in friend_ids
            ))

        return conversations


message_service = MessageService()
