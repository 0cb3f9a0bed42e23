from typing import List
from fastapi import APIRouter, Depends, status

from blogapi.dependencies import get_message_repository, require_user
from blogapi.models.user import User
from blogapi.repositories.message_repository import MessageRepository
from blogapi.schemas.message import MessageResponse, MessageCreate

router = APIRouter()

@router.get("", response_model=List[MessageResponse])
async def list_messages(messages: MessageRepository = Depends(get_message_repository)):
    """Message board, newest first"""
    recent = await messages.list_recent()
    return [{
        "id": msg.id,
        "user_id": msg.user_id,
        "username": msg.author.username,
        "title": msg.title,
        "text": msg.text,
        "created_at": msg.created_at
    } for msg in recent]

@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def post_message(
    message_data: MessageCreate,
    messages: MessageRepository = Depends(get_message_repository),
    current_user: User = Depends(require_user)
):
    message = await messages.create({
        "user_id": current_user.id,
        "title": message_data.title,
        "text": message_data.text,
    })

    return {
        "id": message.id,
        "user_id": message.user_id,
        "username": current_user.username,
        "title": message.title,
        "text": message.text,
        "created_at": message.created_at
    }
