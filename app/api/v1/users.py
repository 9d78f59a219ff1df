"""
User lookup, suggestion and feed endpoints
"""
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.dependencies import get_current_user, get_current_user_id
from app.models.user import User
from app.schemas.post import FeedPost
from app.schemas.user import OwnProfile, SuggestedUser, UserProfile
from app.services.feed_service import feed_service
from app.services.suggestion_service import suggestion_service
from app.services.user_service import user_service

router = APIRouter()


@router.get("/me", response_model=OwnProfile)
async def get_my_profile(
    current_user: User = Depends(get_current_user)
):
    """Get current user's profile"""
    return OwnProfile.from_user(current_user)


@router.get("/suggested-friends", response_model=List[SuggestedUser])
async def get_suggested_friends(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Users with overlapping skills the caller has no friendship or request with"""
    return suggestion_service.get_suggested_friends(db, current_user_id)


@router.get("/feed", response_model=List[FeedPost])
async def get_feed(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Latest posts from friends and yourself"""
    return feed_service.get_feed(db, current_user_id)


@router.get("", response_model=List[SuggestedUser])
async def search_users(
    search: str = Query("", max_length=100),
    skill: str = Query("", max_length=100),
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Search users by name/username and skill"""
    return user_service.search_users(db, search=search, skill=skill)


@router.get("/{user_id}", response_model=UserProfile)
async def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Get a user's public profile"""
    return user_service.get_profile(db, user_id)
