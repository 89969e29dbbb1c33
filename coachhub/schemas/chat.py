"""Chat and message schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from coachhub.core.enums import MessageType
from coachhub.schemas.user import UserRef, UserSummary


class MessageCreate(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)
    message_type: MessageType = MessageType.TEXT
    message_url: str | None = Field(None, max_length=1000)
    program_request_id: UUID | None = None


class MessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    chat_id: UUID
    sender_id: UUID | None = None
    message: str
    message_type: MessageType | None = None
    message_url: str | None = None
    program_request_id: UUID | None = None
    created_at: datetime | None = None
    sender: UserRef | None = None


class ChatCreate(BaseModel):
    """Other participants; the caller is always added."""

    participant_ids: list[UUID] = Field(..., min_length=1)


class DirectChatRequest(BaseModel):
    user_id: UUID


class ChatRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime | None = None


class ChatSummaryRead(ChatRead):
    """Chat list entry: other participants plus the latest message."""

    participants: list[UserSummary] = []
    last_message: MessageRead | None = None
