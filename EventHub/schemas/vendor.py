from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from EventHub.database import ServiceTypeEnum, PriceUnitEnum


class BusinessAddress(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


class ServiceCreate(BaseModel):
    """Schema for adding a service to a vendor catalog."""
    name: str = Field(..., min_length=1, max_length=100, description="Service name")
    description: Optional[str] = None
    price: float = Field(..., ge=0, description="Price must be zero or more")
    price_unit: PriceUnitEnum = PriceUnitEnum.flat

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Service name cannot be empty')
        return v


class ServiceUpdate(BaseModel):
    """Partial update of a catalog service; unset fields keep their value."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    price_unit: Optional[PriceUnitEnum] = None


class VendorCreate(BaseModel):
    """Schema for creating a vendor profile."""
    business_name: str = Field(..., min_length=2, max_length=120)
    business_description: str = Field(..., min_length=1)
    service_type: ServiceTypeEnum
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None
    business_address: Optional[BusinessAddress] = None
    business_logo: Optional[str] = ""
    gallery: List[str] = []
    social_media: Dict[str, str] = {}
    services: List[ServiceCreate] = []

    @field_validator('business_name')
    @classmethod
    def strip_business_name(cls, v: str) -> str:
        return v.strip()

    @field_validator('contact_email')
    @classmethod
    def lower_email(cls, v):
        return v.lower() if v else v


class VendorUpdate(BaseModel):
    """Schema for updating a vendor profile. Ratings and reviews are not writable here."""
    model_config = ConfigDict(extra="forbid")

    business_name: Optional[str] = Field(None, min_length=2, max_length=120)
    business_description: Optional[str] = Field(None, min_length=1)
    service_type: Optional[ServiceTypeEnum] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, min_length=1)
    business_address: Optional[BusinessAddress] = None
    business_logo: Optional[str] = None
    gallery: Optional[List[str]] = None
    social_media: Optional[Dict[str, str]] = None
    is_verified: Optional[bool] = None


class ReviewCreate(BaseModel):
    """Schema for reviewing a vendor."""
    rating: int = Field(..., ge=1, le=5, description="Rating must be 1-5")
    comment: Optional[str] = Field(None, max_length=2000)


class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    service_id: str
    name: str
    description: Optional[str] = None
    price: float
    price_unit: PriceUnitEnum


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    review_id: str
    user_id: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None


class VendorOwner(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None


class VendorResponse(BaseModel):
    """Schema for vendor response."""
    model_config = ConfigDict(from_attributes=True)

    vendor_id: str
    user_id: str
    owner: Optional[VendorOwner] = None
    business_name: str
    business_description: str
    service_type: ServiceTypeEnum
    contact_email: str
    contact_phone: str
    business_address: Optional[BusinessAddress] = None
    business_logo: Optional[str] = ""
    gallery: List[str] = []
    social_media: Dict[str, str] = {}
    services: List[ServiceResponse] = []
    reviews: List[ReviewResponse] = []
    average_rating: float
    is_verified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
