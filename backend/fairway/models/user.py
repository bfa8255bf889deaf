"""
User model for authentication and profile data.
"""
from sqlalchemy import Column, String, Boolean, Integer
from sqlalchemy.orm import relationship
from fairway.db.base import BaseModel


class User(BaseModel):
    """User account with an optional golfer profile (full name, handicap)."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(100), nullable=True)
    handicap = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    owned_trips = relationship("Trip", back_populates="owner")
    golfers = relationship("Golfer", back_populates="user")
