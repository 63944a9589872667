"""Conversation and message schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .user import UserSummaryRead


class MessageRead(BaseModel):
    id: int
    conversation_id: int
    sender_id: int
    content: str
    is_read: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class MessageCreate(BaseModel):
    conversation_id: int
    content: str


class ConversationCreate(BaseModel):
    recipient_id: int
    initial_message: str | None = None


class ConversationRead(BaseModel):
    id: int
    other_user: UserSummaryRead | None = None
    last_message: MessageRead | None = None
    unread_count: int = 0
    last_message_at: datetime | None = None
    created_at: datetime | None = None


class UnreadCountRead(BaseModel):
    count: int
