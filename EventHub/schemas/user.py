from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """Schema for user response."""
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None


class UserProfileResponse(UserResponse):
    """The caller's own profile, with their vendor profile id when they have one."""
    vendor_id: Optional[str] = None
