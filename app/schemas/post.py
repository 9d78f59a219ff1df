"""Feed schemas"""
from datetime import datetime
from typing import Optional

from app.models.user import User
from app.schemas import CamelModel


class FeedAuthor(CamelModel):
    id: int
    username: str = ""
    profile_photo_url: str = ""

    @classmethod
    def from_user(cls, user: User) -> "FeedAuthor":
        return cls(
            id=user.id,
            username=user.username or "",
            profile_photo_url=user.profile_photo_url or "",
        )


class FeedPost(CamelModel):
    """Post visible in the caller's feed"""
    id: int
    content: str = ""
    media_url: Optional[str] = None
    media_type: Optional[str] = None
    created_at: datetime
    user: FeedAuthor
    likes_count: int = 0
    comments_count: int = 0
    is_liked: bool = False
