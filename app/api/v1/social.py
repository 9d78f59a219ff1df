"""
Social/Friends API endpoints
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.dependencies import get_current_user_id
from app.schemas.social import (
    FriendEntry,
    FriendRequestEntry,
    FriendRequestResponse,
    FriendActionResponse,
    FriendshipCheckResponse,
    FriendCountResponse,
)
from app.services.access_gate import access_gate
from app.services.social_service import social_service

router = APIRouter(prefix="/social", tags=["social"])


@router.get("/friends", response_model=List[FriendEntry])
async def get_friends(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Get current user's friends list"""
    return social_service.get_friends(db, current_user_id)


@router.get("/requests/incoming", response_model=List[FriendRequestEntry])
async def get_incoming_requests(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Get pending friend requests sent to the current user"""
    return social_service.get_incoming_requests(db, current_user_id)


@router.get("/requests/outgoing", response_model=List[FriendRequestEntry])
async def get_outgoing_requests(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Get pending friend requests sent by the current user"""
    return social_service.get_outgoing_requests(db, current_user_id)


@router.post("/friends/request/{user_id}", response_model=FriendRequestResponse)
async def send_friend_request(
    user_id: int,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Send a friend request to another user"""
    return social_service.send_friend_request(db, current_user_id, user_id)


@router.post("/friends/accept/{request_id}", response_model=FriendActionResponse)
async def accept_friend_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Accept a friend request"""
    friendship = social_service.accept_friend_request(db, current_user_id, request_id)
    return FriendActionResponse(
        success=True,
        message="Friend request accepted",
        friendship_id=friendship.id
    )


@router.delete("/friends/request/{request_id}", response_model=FriendActionResponse)
async def delete_friend_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Cancel a sent friend request or reject a received one"""
    social_service.cancel_or_reject_request(db, current_user_id, request_id)
    return FriendActionResponse(
        success=True,
        message="Friend request deleted"
    )


@router.get("/friends/check/{user_id}", response_model=FriendshipCheckResponse)
async def check_friendship(
    user_id: int,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Check if you are friends with another user"""
    is_friend = access_gate.are_connected(db, current_user_id, user_id)
    return FriendshipCheckResponse(is_friend=is_friend, user_id=user_id)


@router.get("/friends/count", response_model=FriendCountResponse)
async def get_friend_count(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Get friend count for current user"""
    return FriendCountResponse(count=social_service.get_friend_count(db, current_user_id))


@router.delete("/friends/{friendship_id}", response_model=FriendActionResponse)
async def remove_friend(
    friendship_id: int,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Remove a friend"""
    social_service.remove_friend(db, current_user_id, friendship_id)
    return FriendActionResponse(
        success=True,
        message="Friend removed"
    )
