from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from EventHub.database import EventTypeEnum, EventServiceEnum, EventStatusEnum


class EventCreate(BaseModel):
    """Schema for creating an event."""
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    date: datetime
    time: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    event_type: EventTypeEnum
    expected_attendees: int = Field(..., gt=0, description="Expected attendees must be positive")
    budget: float = Field(..., gt=0, description="Budget must be positive")
    services: List[EventServiceEnum] = []
    status: EventStatusEnum = EventStatusEnum.planning

    @field_validator('title', 'location')
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Field cannot be blank')
        return v


class EventUpdate(BaseModel):
    """Partial event update; unset fields keep their value."""
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    date: Optional[datetime] = None
    time: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    event_type: Optional[EventTypeEnum] = None
    expected_attendees: Optional[int] = Field(None, gt=0)
    budget: Optional[float] = Field(None, gt=0)
    services: Optional[List[EventServiceEnum]] = None
    status: Optional[EventStatusEnum] = None


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event_id: str
    user_id: str
    title: str
    description: str
    date: datetime
    time: str
    location: str
    event_type: EventTypeEnum
    expected_attendees: int
    budget: float
    services: List[EventServiceEnum] = []
    status: EventStatusEnum
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
