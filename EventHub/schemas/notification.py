from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from EventHub.database import NotificationTypeEnum


class NotificationResponse(BaseModel):
    """Schema for notification response."""
    model_config = ConfigDict(from_attributes=True)

    notification_id: str
    recipient_id: str
    sender_id: Optional[str] = None
    type: NotificationTypeEnum
    title: str
    message: str
    is_read: bool
    related_model: Optional[str] = None
    related_id: Optional[str] = None
    action_url: Optional[str] = None
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
