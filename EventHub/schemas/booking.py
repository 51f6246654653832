from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from EventHub.database import BookingStatusEnum, PaymentStatusEnum


class BookingCreate(BaseModel):
    """Schema for booking a vendor service for an event."""
    event_id: str = Field(..., min_length=1)
    vendor_id: str = Field(..., min_length=1)
    service_id: str = Field(..., min_length=1)
    booking_date: datetime
    start_time: str = Field(..., min_length=1)
    end_time: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    special_requirements: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class BookingUpdate(BaseModel):
    """Fields a booking party may change. Which party may change which field is checked in the service."""
    model_config = ConfigDict(extra="forbid")

    status: Optional[BookingStatusEnum] = None
    payment_status: Optional[PaymentStatusEnum] = None
    special_requirements: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    booking_id: str
    user_id: str
    event_id: str
    vendor_id: str
    service_id: str
    booking_date: datetime
    start_time: str
    end_time: str
    status: BookingStatusEnum
    amount: float
    payment_status: PaymentStatusEnum
    special_requirements: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
