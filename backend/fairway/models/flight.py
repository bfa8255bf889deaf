"""
Flight model for golfer travel legs.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Enum as SQLEnum
from sqlalchemy.orm import relationship
from fairway.db.base import BaseModel
import enum


class LegType(str, enum.Enum):
    """Direction of a flight relative to the trip."""
    ARRIVAL = "arrival"
    DEPARTURE = "departure"


class Flight(BaseModel):
    """One flight leg for a golfer."""
    __tablename__ = "golfer_flights"

    golfer_id = Column(Integer, ForeignKey("trip_golfers.id"), nullable=False, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    leg_type = Column(SQLEnum(LegType), nullable=False)
    airline = Column(String(100), nullable=False, default="")
    flight_number = Column(String(20), nullable=False, default="")
    departure_airport = Column(String(10), nullable=False, default="")
    arrival_airport = Column(String(10), nullable=False, default="")
    departure_time = Column(DateTime, nullable=False)
    arrival_time = Column(DateTime, nullable=False)

    # Relationships
    golfer = relationship("Golfer", back_populates="flights")
    trip = relationship("Trip", back_populates="flights")
