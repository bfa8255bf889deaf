"""
Lodging model.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from fairway.db.base import BaseModel


class Lodging(BaseModel):
    """Place the group stays; check-in/out are local wall-clock times."""
    __tablename__ = "trip_lodging"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    street_address = Column(String(255), nullable=False, default="")
    city = Column(String(100), nullable=True)
    state = Column(String(50), nullable=True)
    zip_code = Column(String(20), nullable=True)
    website_url = Column(String(500), nullable=True)
    check_in_time = Column(DateTime, nullable=False)
    check_out_time = Column(DateTime, nullable=False)

    trip = relationship("Trip", back_populates="lodging")
