"""Order schemas"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from app.models.order import OrderStatus


class OrderItemCreate(BaseModel):
    """Order line request"""
    menu_item_id: int
    quantity: int = Field(default=1, ge=1)
    notes: Optional[str] = None


class OrderCreate(BaseModel):
    """Create order request (staff)"""
    items: List[OrderItemCreate] = Field(min_length=1)
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    notes: Optional[str] = None


class PublicOrderCreate(BaseModel):
    """Order placed from the public menu page"""
    items: List[OrderItemCreate] = Field(min_length=1)
    customer_name: str = Field(min_length=1, max_length=255)
    customer_phone: str = Field(min_length=1, max_length=30)
    notes: Optional[str] = None


class OrderUpdate(BaseModel):
    """Update order request"""
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    notes: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    """Order status change"""
    status: OrderStatus


class OrderItemResponse(BaseModel):
    """Order line in response"""
    id: int
    menu_item_id: int
    quantity: int
    price: float
    notes: Optional[str]

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    """Order response"""
    id: int
    restaurant_id: int
    user_id: Optional[int]
    customer_name: Optional[str]
    customer_phone: Optional[str]
    status: OrderStatus
    total_amount: float
    notes: Optional[str]
    items: List[OrderItemResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
