"""
Direct messaging endpoints
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.dependencies import get_current_user_id
from app.schemas.message import ConversationResponse, MessageCreate, MessageResponse
from app.services.message_service import message_service

router = APIRouter(prefix="/messages")


@router.get("", response_model=List[ConversationResponse])
async def get_conversations(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Conversation list: message partners and friends"""
    return message_service.get_conversations(db, current_user_id)


@router.get("/{user_id}", response_model=List[MessageResponse])
async def get_messages_with(
    user_id: int,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Messages exchanged with a friend"""
    return message_service.get_conversation(db, current_user_id, user_id)


@router.post("", response_model=MessageResponse)
async def send_message(
    request: MessageCreate,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id)
):
    """Send a message to a friend"""
    return message_service.send_message(db, current_user_id, request.receiver_id, request.content)
