from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatCreate(BaseModel):
    """Schema for opening a chat. The caller is always added as a participant."""
    participants: List[str] = Field(..., min_length=1)
    event_id: Optional[str] = None
    booking_id: Optional[str] = None


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)
    attachments: List[str] = []

    @field_validator('content')
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Message cannot be empty')
        return v


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    message_id: str
    chat_id: str
    sender_id: str
    content: str
    attachments: List[str] = []
    is_read: bool
    timestamp: Optional[datetime] = None


class ChatResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    chat_id: str
    participants: List[str] = Field(default_factory=list, validation_alias="participant_ids")
    event_id: Optional[str] = None
    booking_id: Optional[str] = None
    last_message: Optional[Dict[str, Any]] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ChatDetailResponse(ChatResponse):
    messages: List[MessageResponse] = []
