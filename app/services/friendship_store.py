"""
Relationship store - persistence for friendship edges

Every mutation is a single statement whose outcome is decided by the database:
inserts lean on the unique_friendship_pair constraint, accept/delete are
conditional UPDATE/DELETE statements checked by rowcount. Nothing here does a
separate check-then-write.
"""
from typing import List, Optional, Set
import logging

from sqlalchemy import and_, delete, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError
from app.models.social import Friendship, canonical_pair

logger = logging.getLogger(__name__)


class FriendshipStore:
    """Single-record operations over the friendships table"""

    def get(self, db: Session, edge_id: int) -> Optional[Friendship]:
        return db.query(Friendship).filter(Friendship.id == edge_id).first()

    def find_between(self, db: Session, user_a: int, user_b: int) -> Optional[Friendship]:
        """Edge for the unordered pair {user_a, user_b}, in either direction"""
        low, high = canonical_pair(user_a, user_b)
        return db.query(Friendship).filter(
            Friendship.user_low_id == low,
            Friendship.user_high_id == high
        ).first()

    def create(self, db: Session, requester_id: int, addressee_id: int) -> Friendship:
        """
        Insert a pending edge.

        Raises:
            ConflictError: If any edge already exists for the pair
        """
        friendship = Friendship(
            requester_id=requester_id,
            addressee_id=addressee_id,
            accepted=False
        )
        db.add(friendship)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.info(f"Friendship insert rejected for pair {requester_id}/{addressee_id}: {e.orig}")
            raise ConflictError("A friend request already exists between these users")

        db.refresh(friendship)
        return friendship

    def accept(self, db: Session, edge_id: int, addressee_id: int) -> Optional[Friendship]:
        """
        Flip a pending edge addressed to addressee_id to accepted.

        Returns the updated edge, or None when no pending edge with that id is
        addressed to this user (including one already accepted).
        """
        result = db.execute(
            update(Friendship)
            .where(
                Friendship.id == edge_id,
                Friendship.addressee_id == addressee_id,
                Friendship.accepted.is_(False)
            )
            .values(accepted=True)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            db.rollback()
            return None

        db.commit()
        return self.get(db, edge_id)

    def delete(self, db: Session, edge_id: int, party_id: int, accepted: bool) -> Optional[Friendship]:
        """
        Delete the edge `edge_id` if party_id is one of its participants and it
        is in the given state.

        Returns a detached copy of the deleted edge, or None when nothing matched.
        """
        party_filter = or_(
            Friendship.requester_id == party_id,
            Friendship.addressee_id == party_id
        )
        friendship = db.query(Friendship).filter(
            Friendship.id == edge_id,
            party_filter,
            Friendship.accepted.is_(accepted)
        ).first()
        if friendship is None:
            return None

        result = db.execute(
            delete(Friendship)
            .where(
                Friendship.id == edge_id,
                party_filter,
                Friendship.accepted.is_(accepted)
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            # Lost a race with another delete or an accept
            db.rollback()
            return None

        db.expunge(friendship)
        db.commit()
        return friendship

    def list_accepted(self, db: Session, user_id: int) -> List[Friendship]:
        return db.query(Friendship).filter(
            or_(
                Friendship.requester_id == user_id,
                Friendship.addressee_id == user_id
            ),
            Friendship.accepted.is_(True)
        ).order_by(Friendship.id).all()

    def list_incoming(self, db: Session, user_id: int) -> List[Friendship]:
        return db.query(Friendship).filter(
            Friendship.addressee_id == user_id,
            Friendship.accepted.is_(False)
        ).order_by(Friendship.id).all()

    def list_outgoing(self, db: Session, user_id: int) -> List[Friendship]:
        return db.query(Friendship).filter(
            Friendship.requester_id == user_id,
            Friendship.accepted.is_(False)
        ).order_by(Friendship.id).all()

    def is_accepted_pair(self, db: Session, user_a: int, user_b: int) -> bool:
        low, high = canonical_pair(user_a, user_b)
        return db.query(Friendship.id).filter(
            and_(
                Friendship.user_low_id == low,
                Friendship.user_high_id == high
            ),
            Friendship.accepted.is_(True)
        ).first() is not None

    def connected_user_ids(self, db: Session, user_id: int, accepted_only: bool = True) -> Set[int]:
        """
        Ids of everyone sharing an edge with user_id.

        With accepted_only=False pending requests in either direction count too.
        """
        query = db.query(Friendship.requester_id, Friendship.addressee_id).filter(
            or_(
                Friendship.requester_id == user_id,
                Friendship.addressee_id == user_id
            )
        )
        if accepted_only:
            query = query.filter(Friendship.accepted.is_(True))

        return {
            addressee_id if requester_id == user_id else requester_id
            for requester_id, addressee_id in query.all()
        }


friendship_store = FriendshipStore()
