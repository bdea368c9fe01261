"""Menu schemas"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """Create menu category request"""
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class CategoryUpdate(BaseModel):
    """Update menu category request"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class CategoryResponse(BaseModel):
    """Menu category response"""
    id: int
    restaurant_id: int
    name: str
    description: Optional[str]
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MenuItemCreate(BaseModel):
    """Create menu item request"""
    category_id: int
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(ge=0)
    image_url: Optional[str] = None
    display_order: int = 0
    is_available: bool = True


class MenuItemUpdate(BaseModel):
    """Update menu item request"""
    category_id: Optional[int] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    display_order: Optional[int] = None
    is_available: Optional[bool] = None


class MenuItemResponse(BaseModel):
    """Menu item response"""
    id: int
    restaurant_id: int
    category_id: int
    name: str
    description: Optional[str]
    price: float
    image_url: Optional[str]
    display_order: int
    is_available: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
