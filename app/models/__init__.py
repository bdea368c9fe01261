"""Database models"""

from app.models.restaurant import Restaurant, RestaurantStatus, PLATFORM_ORGANIZATION_ID
from app.models.user import User, UserRole
from app.models.menu import MenuCategory, MenuItem
from app.models.order import Order, OrderItem
from app.models.reservation import Reservation

__all__ = [
    "Restaurant",
    "RestaurantStatus",
    "PLATFORM_ORGANIZATION_ID",
    "User",
    "UserRole",
    "MenuCategory",
    "MenuItem",
    "Order",
    "OrderItem",
    "Reservation",
]
