"""Direct message schemas"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas import CamelModel
from app.schemas.user import UserSummary


class MessageCreate(CamelModel):
    """Send a message to a friend"""
    receiver_id: int
    content: str = Field(..., min_length=1, max_length=5000)


class MessageResponse(CamelModel):
    """Message as seen by the caller"""
    id: int
    content: str
    is_sender: bool
    is_read: bool
    created_at: datetime


class ConversationResponse(CamelModel):
    """One contact in the conversation list"""
    user: UserSummary
    last_message: Optional[MessageResponse] = None
    unread_count: int = 0
    is_friend: bool = False
