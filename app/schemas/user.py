"""User projection schemas"""
from datetime import datetime
from typing import Optional

from app.models.user import User
from app.schemas import CamelModel


class UserSummary(CamelModel):
    """Public profile shown next to friendships, requests and conversations"""
    id: int
    first_name: str = ""
    last_name: str = ""
    username: str = ""
    profile_photo_url: str = ""

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            first_name=user.first_name or "",
            last_name=user.last_name or "",
            username=user.username or "",
            profile_photo_url=user.profile_photo_url or "",
        )


class SuggestedUser(UserSummary):
    """Friend suggestion with the skills it was ranked on"""
    skills: str = ""

    @classmethod
    def from_user(cls, user: User) -> "SuggestedUser":
        summary = UserSummary.from_user(user)
        return cls(**summary.model_dump(), skills=user.skills or "")


class UserProfile(UserSummary):
    """Full public profile"""
    location: str = ""
    skills: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        summary = UserSummary.from_user(user)
        return cls(
            **summary.model_dump(),
            location=user.location or "",
            skills=user.skills or "",
            created_at=user.created_at,
        )


class OwnProfile(UserProfile):
    """The caller's own profile, including contact email"""
    email: str = ""

    @classmethod
    def from_user(cls, user: User) -> "OwnProfile":
        profile = UserProfile.from_user(user)
        return cls(**profile.model_dump(), email=user.email or "")
