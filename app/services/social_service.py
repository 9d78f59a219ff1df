"""
Social service for managing friends and friend requests

Owns the friendship state machine per unordered pair:

    NONE --send_request--> PENDING --accept_request--> ACCEPTED
    PENDING --cancel_or_reject_request--> NONE
    ACCEPTED --remove_friend--> NONE

The caller id is always passed in explicitly and must come from a verified
token. Any failure of "edge id + caller is the right party + right state" is
reported as NotFoundError so non-parties learn nothing about the edge.
"""
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.notification import NotificationType
from app.models.social import Friendship
from app.models.user import User
from app.schemas.social import (
    FriendEntry,
    FriendRequestEntry,
    FriendRequestResponse,
)
from app.schemas.user import UserSummary
from app.services.friendship_store import friendship_store
from app.services.notification_service import (
    notification_service,
    FRIEND_REQUEST_MESSAGE,
    FRIEND_ACCEPTED_MESSAGE,
)
from app.services.user_service import user_service

logger = logging.getLogger(__name__)

ALREADY_FRIENDS = "You are already friends with this user"
ALREADY_SENT = "You have already sent a friend request to this user"
ALREADY_RECEIVED = "This user has already sent you a friend request"


def conflict_reason(existing: Friendship, caller_id: int) -> str:
    """Why a new request from caller_id collides with an existing edge"""
    if existing.accepted:
        return ALREADY_FRIENDS
    if existing.requester_id == caller_id:
        return ALREADY_SENT
    return ALREADY_RECEIVED


class SocialService:
    """Service for social/friend operations"""

    def send_friend_request(
        self,
        db: Session,
        user_id: int,
        target_user_id: int
    ) -> FriendRequestResponse:
        """
        Send a friend request from user_id to target_user_id.

        Raises:
            ValidationError: Request to yourself
            NotFoundError: Target user does not exist
            ConflictError: Already friends or a request is pending either way
        """
        if target_user_id == user_id:
            raise ValidationError("You cannot send a friend request to yourself")

        target = user_service.get_user(db, target_user_id)
        if not target:
            raise NotFoundError("User not found")

        existing = friendship_store.find_between(db, user_id, target_user_id)
        if existing:
            raise ConflictError(conflict_reason(existing, user_id))

        try:
            friendship = friendship_store.create(db, user_id, target_user_id)
        except ConflictError:
            # A concurrent request for the same pair won the insert
            winner = friendship_store.find_between(db, user_id, target_user_id)
            if winner:
                raise ConflictError(conflict_reason(winner, user_id))
            raise

        logger.info(f"Friend request sent: {user_id} -> {target_user_id} (edge {friendship.id})")

        notification_service.emit_best_effort(
            db, target_user_id, NotificationType.FRIEND_REQUEST, FRIEND_REQUEST_MESSAGE
        )

        return FriendRequestResponse(
            edge_id=friendship.id,
            requester_id=friendship.requester_id,
            addressee_id=friendship.addressee_id,
            accepted=friendship.accepted,
            created_at=friendship.created_at,
            user=UserSummary.from_user(target)
        )

    def accept_friend_request(
        self,
        db: Session,
        user_id: int,
        request_id: int
    ) -> Friendship:
        """Accept a pending request addressed to user_id"""
        friendship = friendship_store.accept(db, request_id, user_id)
        if not friendship:
            raise NotFoundError("Friend request not found")

        logger.info(f"Friend request accepted: edge {request_id} by {user_id}")

        notification_service.emit_best_effort(
            db, friendship.requester_id, NotificationType.FRIEND_ACCEPTED, FRIEND_ACCEPTED_MESSAGE
        )
        return friendship

    def cancel_or_reject_request(
        self,
        db: Session,
        user_id: int,
        request_id: int
    ) -> Friendship:
        """Delete a pending request; the sender cancels, the receiver rejects"""
        friendship = friendship_store.delete(db, request_id, user_id, accepted=False)
        if not friendship:
            raise NotFoundError("Friend request not found")

        action = "cancelled" if friendship.requester_id == user_id else "rejected"
        logger.info(f"Friend request {action}: edge {request_id} by {user_id}")
        return friendship

    def remove_friend(
        self,
        db: Session,
        user_id: int,
        friendship_id: int
    ) -> Friendship:
        """Remove an accepted friendship; no notification is sent"""
        friendship = friendship_store.delete(db, friendship_id, user_id, accepted=True)
        if not friendship:
            raise NotFoundError("Friendship not found")

        logger.info(f"Friendship removed: edge {friendship_id} by {user_id}")
        return friendship

    def get_friends(self, db: Session, user_id: int) -> List[FriendEntry]:
        """Get list of friends, ordered by edge id"""
        friendships = friendship_store.list_accepted(db, user_id)
        return self._with_counterparts(db, user_id, friendships, FriendEntry)

    def get_incoming_requests(self, db: Session, user_id: int) -> List[FriendRequestEntry]:
        """Pending requests addressed to user_id"""
        friendships = friendship_store.list_incoming(db, user_id)
        return self._with_counterparts(db, user_id, friendships, FriendRequestEntry)

    def get_outgoing_requests(self, db: Session, user_id: int) -> List[FriendRequestEntry]:
        """Pending requests sent by user_id"""
        friendships = friendship_store.list_outgoing(db, user_id)
        return self._with_counterparts(db, user_id, friendships, FriendRequestEntry)

    def get_friend_count(self, db: Session, user_id: int) -> int:
        return len(friendship_store.list_accepted(db, user_id))

    def _with_counterparts(self, db: Session, user_id: int, friendships: List[Friendship], entry_cls):
        counterpart_ids = [fs.other_party(user_id) for fs in friendships]
        users = {
            u.id: u for u in db.query(User).filter(User.id.in_(counterpart_ids)).all()
        } if counterpart_ids else {}

        entries = []
        for fs, counterpart_id in zip(friendships, counterpart_ids):
            counterpart: Optional[User] = users.get(counterpart_id)
            if not counterpart:
                continue
            fields = {"edge_id": fs.id, "user": UserSummary.from_user(counterpart)}
            if "created_at" in entry_cls.model_fields:
                fields["created_at"] = fs.created_at
            entries.append(entry_cls(**fields))
        return entries


social_service = SocialService()
