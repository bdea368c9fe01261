"""Platform staff schemas"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class KAMCreate(BaseModel):
    """Create KAM request"""
    email: EmailStr
    password: str = Field(min_length=8)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: Optional[str] = None
