"""Reservation schemas"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from app.models.reservation import ReservationStatus


class ReservationCreate(BaseModel):
    """Create reservation request (staff)"""
    table_number: str = Field(min_length=1, max_length=20)
    start_time: datetime
    end_time: datetime
    number_of_guests: int = Field(ge=1)
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = None
    notes: Optional[str] = None


class PublicReservationCreate(BaseModel):
    """Booking from the public restaurant page"""
    table_number: str = Field(min_length=1, max_length=20)
    start_time: datetime
    end_time: datetime
    number_of_guests: int = Field(ge=1)
    customer_name: str = Field(min_length=1, max_length=255)
    customer_email: EmailStr
    customer_phone: Optional[str] = None
    notes: Optional[str] = None


class ReservationUpdate(BaseModel):
    """Update reservation request"""
    table_number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    number_of_guests: Optional[int] = Field(default=None, ge=1)
    status: Optional[ReservationStatus] = None
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = None
    notes: Optional[str] = None


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: int
    restaurant_id: int
    user_id: Optional[int]
    customer_name: Optional[str]
    customer_email: Optional[str]
    customer_phone: Optional[str]
    table_number: str
    start_time: datetime
    end_time: datetime
    number_of_guests: int
    status: ReservationStatus
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
