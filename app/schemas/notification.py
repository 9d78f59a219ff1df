"""Notification schemas"""
from datetime import datetime

from app.schemas import CamelModel


class NotificationResponse(CamelModel):
    id: int
    type: str
    message: str
    is_read: bool
    created_at: datetime


class UnreadCountResponse(CamelModel):
    count: int


class NotificationActionResponse(CamelModel):
    success: bool
    message: str
    updated: int = 0
