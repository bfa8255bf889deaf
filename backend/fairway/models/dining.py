"""
Dining reservation model.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from fairway.db.base import BaseModel


class Dining(BaseModel):
    """Restaurant reservation for the group."""
    __tablename__ = "trip_dining"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    street_address = Column(String(255), nullable=False, default="")
    city = Column(String(100), nullable=True)
    state = Column(String(50), nullable=True)
    zip_code = Column(String(20), nullable=True)
    website_url = Column(String(500), nullable=True)
    reservation_time = Column(DateTime, nullable=False)
    party_size = Column(Integer, nullable=False, default=0)

    trip = relationship("Trip", back_populates="dining")
