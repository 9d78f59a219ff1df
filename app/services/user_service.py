"""
User lookup used by the social graph
"""
from typing import List, Optional
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import AuthorizationError, NotFoundError
from app.models.user import User
from app.schemas.user import SuggestedUser, UserProfile

logger = logging.getLogger(__name__)


class UserService:
    """Read-only access to user accounts"""

    def get_user(self, db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    def require_user(self, db: Session, user_id: int) -> User:
        user = self.get_user(db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def require_caller(self, db: Session, caller_id: int) -> User:
        """The authenticated caller's account; a token for a deleted account is forbidden"""
        user = self.get_user(db, caller_id)
        if not user:
            logger.warning(f"Authenticated caller {caller_id} has no account")
            raise AuthorizationError("Caller account does not exist")
        return user

    def get_profile(self, db: Session, user_id: int) -> UserProfile:
        return UserProfile.from_user(self.require_user(db, user_id))

    def search_users(
        self,
        db: Session,
        search: str = "",
        skill: str = "",
        limit: Optional[int] = None
    ) -> List[SuggestedUser]:
        """Substring search over names/username and skills"""
        query = db.query(User)

        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    User.username.like(pattern),
                    User.first_name.like(pattern),
                    User.last_name.like(pattern)
                )
            )

        if skill:
            query = query.filter(User.skills.like(f"%{skill}%"))

        limit = settings.USER_SEARCH_LIMIT if limit is None else limit
        users = query.order_by(User.id).limit(limit).all()
        return [SuggestedUser.from_user(u) for u in users]


user_service = UserService()
