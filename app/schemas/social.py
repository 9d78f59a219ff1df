"""
Social and friends schemas
"""
from datetime import datetime
from typing import Optional

from app.schemas import CamelModel
from app.schemas.user import UserSummary


class FriendEntry(CamelModel):
    """Established friendship seen from one side"""
    edge_id: int
    user: UserSummary


class FriendRequestEntry(CamelModel):
    """Pending request with the counterpart's profile"""
    edge_id: int
    created_at: datetime
    user: UserSummary


class FriendRequestResponse(CamelModel):
    """Edge created by a friend request"""
    edge_id: int
    requester_id: int
    addressee_id: int
    accepted: bool
    created_at: datetime
    user: UserSummary


class FriendActionResponse(CamelModel):
    """Response after friend action (accept/cancel/reject/remove)"""
    success: bool
    message: str
    friendship_id: Optional[int] = None


class FriendshipCheckResponse(CamelModel):
    is_friend: bool
    user_id: int


class FriendCountResponse(CamelModel):
    count: int
