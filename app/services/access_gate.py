"""
Access gate - connection predicate consumed by messaging and the feed
"""
from typing import Set

from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.services.friendship_store import friendship_store

FRIENDS_ONLY_MESSAGE = "You can only message with friends"


class AccessGate:
    """Read-only checks over the friendship store"""

    def are_connected(self, db: Session, user_a: int, user_b: int) -> bool:
        """True iff an accepted edge exists for the unordered pair"""
        if user_a == user_b:
            return False
        return friendship_store.is_accepted_pair(db, user_a, user_b)

    def require_connection(
        self,
        db: Session,
        user_a: int,
        user_b: int,
        message: str = FRIENDS_ONLY_MESSAGE
    ) -> None:
        if not self.are_connected(db, user_a, user_b):
            raise ValidationError(message)

    def visible_user_ids(self, db: Session, viewer_id: int) -> Set[int]:
        """Authors whose content the viewer may see: accepted friends plus self"""
        visible = friendship_store.connected_user_ids(db, viewer_id, accepted_only=True)
        visible.add(viewer_id)
        return visible


access_gate = AccessGate()
