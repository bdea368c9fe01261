"""Reservation model"""

from datetime import datetime
import enum

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text

from app.database import Base


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True)  # Null for public bookings

    # Customer information (public bookings)
    customer_name = Column(String(255))
    customer_email = Column(String(255))
    customer_phone = Column(String(30))

    # Reservation details
    table_number = Column(String(20), nullable=False)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    number_of_guests = Column(Integer, nullable=False)

    status = Column(String(20), nullable=False, default=ReservationStatus.PENDING.value)
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
