"""Restaurant (tenant) model"""

from datetime import datetime
import enum

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text, Enum
from sqlalchemy.orm import relationship

from app.database import Base


# Reserved tenant that hosts platform staff (KAMs and the bootstrap account)
PLATFORM_ORGANIZATION_ID = 1


def is_platform_organization(restaurant_id: int) -> bool:
    return restaurant_id == PLATFORM_ORGANIZATION_ID


class RestaurantStatus(str, enum.Enum):
    """Tenant lifecycle states"""
    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class Restaurant(Base):
    """Restaurant tenant"""
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    address = Column(Text)
    phone = Column(String(30))
    email = Column(String(255), unique=True)
    status = Column(
        Enum(
            RestaurantStatus,
            values_callable=lambda e: [m.value for m in e],
            native_enum=False,
            length=20,
        ),
        nullable=False,
        default=RestaurantStatus.PENDING,
    )
    is_active = Column(Boolean, default=False)  # Mirrors status == active

    # Key Account Manager
    kam_id = Column(Integer, ForeignKey("users.id", use_alter=True, name="fk_restaurants_kam_id"), index=True)
    activated_by = Column(Integer)
    activated_at = Column(DateTime)

    # Registration contact
    contact_name = Column(String(255))
    contact_email = Column(String(255))
    contact_phone = Column(String(30))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    users = relationship("User", back_populates="restaurant", foreign_keys="User.restaurant_id")
    kam = relationship("User", foreign_keys=[kam_id], post_update=True)
