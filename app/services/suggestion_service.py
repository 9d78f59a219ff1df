"""
Friend suggestions ranked by skill overlap
"""
from typing import Iterable, List, Optional
import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.user import User
from app.schemas.user import SuggestedUser
from app.services.friendship_store import friendship_store
from app.services.user_service import user_service

logger = logging.getLogger(__name__)


def skill_overlap_score(skill_tokens: Iterable[str], candidate_skills: Optional[str]) -> int:
    """
    Number of the caller's skill tokens found as a substring of the candidate's
    raw skills text. Case-sensitive; "Go" matches "Google".
    """
    if not candidate_skills:
        return 0
    return sum(1 for token in skill_tokens if token in candidate_skills)


class SuggestionService:
    """Ranks users the caller has no edge with"""

    def get_suggested_friends(
        self,
        db: Session,
        user_id: int,
        limit: Optional[int] = None
    ) -> List[SuggestedUser]:
        """
        Top candidates by skill overlap.

        Excludes the caller and everyone sharing an edge with them, accepted or
        pending, in either direction. Ties keep user id order, so a caller with
        no skills gets the first users by id.
        """
        caller = user_service.require_caller(db, user_id)
        limit = settings.SUGGESTION_LIMIT if limit is None else limit

        excluded = friendship_store.connected_user_ids(db, user_id, accepted_only=False)
        excluded.add(user_id)

        skill_tokens = caller.skill_list
        candidates = db.query(User).filter(User.id.notin_(sorted(excluded))).order_by(User.id).all()

        # sorted() is stable, ties stay in id order
        ranked = sorted(
            candidates,
            key=lambda candidate: skill_overlap_score(skill_tokens, candidate.skills),
            reverse=True
        )

        logger.debug(f"Ranked {len(candidates)} suggestion candidates for user {user_id}")
        return [SuggestedUser.from_user(u) for u in ranked[:limit]]


suggestion_service = SuggestionService()
