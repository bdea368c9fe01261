"""Restaurant (tenant) schemas"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from app.models.restaurant import RestaurantStatus


class RestaurantRegister(BaseModel):
    """Public restaurant registration"""
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: EmailStr
    contact_name: str = Field(min_length=1, max_length=255)
    contact_email: EmailStr
    contact_phone: Optional[str] = None


class RestaurantStatusUpdate(BaseModel):
    """Status change by platform staff"""
    status: RestaurantStatus


class AssignKAMRequest(BaseModel):
    """Assign a Key Account Manager"""
    kam_id: int


class RestaurantResponse(BaseModel):
    """Restaurant response"""
    id: int
    name: str
    description: Optional[str]
    address: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    status: RestaurantStatus
    is_active: bool
    kam_id: Optional[int]
    activated_by: Optional[int]
    activated_at: Optional[datetime]
    contact_name: Optional[str]
    contact_email: Optional[str]
    contact_phone: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PublicRestaurantResponse(BaseModel):
    """Restaurant details shown on public pages"""
    id: int
    name: str
    description: Optional[str]
    address: Optional[str]
    phone: Optional[str]

    class Config:
        from_attributes = True
