"""User model for dashboard authentication"""

from datetime import datetime
import enum

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Enum, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from app.database import Base


class UserRole(str, enum.Enum):
    """User roles. KAM users belong to the platform organization."""
    ADMIN = "Admin"
    STAFF = "Staff"
    CLIENT = "Client"
    KAM = "KAM"


# Roles that the isolation predicate lets see platform organization rows
PLATFORM_ROLES = frozenset({UserRole.KAM, UserRole.ADMIN})


class User(Base):
    """Users of every tenant, platform staff included"""
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "email", name="uq_users_restaurant_email"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)

    # Authentication
    email = Column(String(255), nullable=False)
    hashed_password = Column(String(255), nullable=False)

    # Profile
    first_name = Column(String(100))
    last_name = Column(String(100))
    phone = Column(String(30))
    timezone = Column(String(50), default="UTC")
    language = Column(String(10), default="en")
    preferences = Column(JSON)  # Free-form UI settings owned by the user

    # Role
    role = Column(
        Enum(
            UserRole,
            values_callable=lambda e: [m.value for m in e],
            native_enum=False,
            length=20,
        ),
        nullable=False,
    )

    # Status
    is_active = Column(Boolean, default=True)

    # Timestamps
    last_login = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="users", foreign_keys=[restaurant_id])
