"""
Pydantic schemas for direct messages and derived conversations.
"""

from datetime import datetime

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.user import UserResponse


class MessageCreate(CamelModel):
    receiver_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, max_length=5000)


class MessageResponse(CamelModel):
    id: str
    sender_id: str
    receiver_id: str
    content: str
    read: bool
    created_at: datetime


class ConversationResponse(CamelModel):
    user: UserResponse
    last_message: MessageResponse


class UnreadCountResponse(CamelModel):
    unread: int
