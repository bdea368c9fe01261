"""User management schemas"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, EmailStr, Field

from app.models.user import UserRole


class UserCreate(BaseModel):
    """Create user request"""
    email: EmailStr
    password: str = Field(min_length=8)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: Optional[str] = None
    role: UserRole = UserRole.STAFF
    timezone: str = "UTC"
    language: str = "en"


class UserUpdate(BaseModel):
    """Update user request"""
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = None
    role: Optional[UserRole] = None
    timezone: Optional[str] = None
    language: Optional[str] = None


class UserStatusUpdate(BaseModel):
    """Enable or disable a user"""
    is_active: bool


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own account"""
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)
    timezone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    language: Optional[str] = Field(default=None, min_length=1, max_length=10)


class PasswordChange(BaseModel):
    """Change own password"""
    current_password: str
    new_password: str = Field(min_length=8)


class PreferencesUpdate(BaseModel):
    """Replace the stored UI preferences"""
    preferences: Dict[str, Any]
