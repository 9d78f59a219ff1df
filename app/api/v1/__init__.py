"""
API v1 routes aggregation
"""
from fastapi import APIRouter
from app.api.v1 import users, social, messages, notifications

api_router = APIRouter()

# Users
api_router.include_router(users.router, prefix="/users", tags=["users"])

# Social/Friends
api_router.include_router(social.router, tags=["social"])

# Messages
api_router.include_router(messages.router, tags=["messages"])

# Notifications
api_router.include_router(notifications.router, tags=["notifications"])
