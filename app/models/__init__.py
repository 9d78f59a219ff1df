"""
Database models for SkillShareHub Backend

All models should be imported here for Alembic to detect them.
"""
from app.models.user import User
from app.models.social import Friendship
from app.models.notification import Notification, NotificationType
from app.models.message import Message
from app.models.post import Post, Like, Comment

__all__ = [
    # User
    "User",
    # Social
    "Friendship",
    # Notification
    "Notification",
    "NotificationType",
    # Messaging
    "Message",
    # Content
    "Post",
    "Like",
    "Comment",
]
