"""
User model

Accounts are owned by the auth/profile collaborators; the social graph only
reads them for lookups, projections and skill ranking.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text
from app.database import Base
from app.utils.time_utils import utc_now


class User(Base):
    """User account model"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    username = Column(String(50), unique=True, nullable=True, index=True)
    email = Column(String(255), unique=True, nullable=True, index=True)

    # Credentials are managed by the auth service
    password_hash = Column(Text, nullable=True)
    password_salt = Column(Text, nullable=True)

    # Profile
    location = Column(String(255), nullable=True)
    skills = Column(Text, nullable=True)  # Comma-separated, e.g. "Go,Rust"
    profile_photo_url = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utc_now)

    @property
    def skill_list(self) -> list:
        """Trimmed, non-empty skill tokens in authored order"""
        if not self.skills:
            return []
        return [skill.strip() for skill in self.skills.split(",") if skill.strip()]
