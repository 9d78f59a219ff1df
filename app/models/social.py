"""
Social features models - Friends and friend requests
"""
from sqlalchemy import (
    Column, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship
from app.database import Base
from app.utils.time_utils import utc_now


def canonical_pair(user_a: int, user_b: int) -> tuple:
    """Order two user ids so {a, b} and {b, a} share one key"""
    return (user_a, user_b) if user_a <= user_b else (user_b, user_a)


class Friendship(Base):
    """
    Friendship edge between two users

    requester_id/addressee_id record who initiated; accepted=False is a pending
    request, accepted=True an established friendship. user_low_id/user_high_id
    hold the same pair in canonical order and carry the uniqueness constraint,
    so a pending A->B request blocks B->A at the storage level.
    """
    __tablename__ = "friendships"

    id = Column(Integer, primary_key=True, autoincrement=True)
    requester_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    addressee_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Canonical unordered pair
    user_low_id = Column(Integer, nullable=False)
    user_high_id = Column(Integer, nullable=False)

    accepted = Column(Boolean, nullable=False, default=False)

    # Not touched on acceptance
    created_at = Column(DateTime, default=utc_now)

    __table_args__ = (
        UniqueConstraint('user_low_id', 'user_high_id', name='unique_friendship_pair'),
        CheckConstraint('requester_id <> addressee_id', name='no_self_friendship'),
        # Deleted edge ids are never handed out again
        {"sqlite_autoincrement": True},
    )

    # Relationships
    requester = relationship("User", foreign_keys=[requester_id])
    addressee = relationship("User", foreign_keys=[addressee_id])

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.requester_id is not None and self.addressee_id is not None:
            self.user_low_id, self.user_high_id = canonical_pair(self.requester_id, self.addressee_id)

    def other_party(self, user_id: int) -> int:
        """The participant that is not user_id"""
        return self.addressee_id if self.requester_id == user_id else self.requester_id
