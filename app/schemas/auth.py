"""Authentication schemas"""

from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, EmailStr, Field

from app.models.user import UserRole


class Token(BaseModel):
    """JWT token response"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: "UserResponse"


class LoginRequest(BaseModel):
    """Login request.

    ``restaurant_id`` picks the account when the same email exists in
    several restaurants. The email is only looked up, never stored, so it
    is not validated as an address.
    """
    email: str = Field(min_length=1, max_length=255)
    password: str
    restaurant_id: Optional[int] = None


class RegisterRequest(BaseModel):
    """Create a user in the caller's restaurant"""
    email: EmailStr
    password: str = Field(min_length=8)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: Optional[str] = None
    role: UserRole = UserRole.STAFF


class UserResponse(BaseModel):
    """User response"""
    id: int
    restaurant_id: int
    email: str
    first_name: Optional[str]
    last_name: Optional[str]
    phone: Optional[str]
    role: UserRole
    timezone: Optional[str]
    language: Optional[str]
    preferences: Optional[Dict[str, Any]] = None
    is_active: bool
    last_login: Optional[datetime]
    created_at: datetime

    class Config:
        from_attributes = True


Token.model_rebuild()
