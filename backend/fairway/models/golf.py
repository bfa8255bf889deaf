"""
Golf course, round and pairing models.
"""
from sqlalchemy import Column, String, Date, Time, ForeignKey, Integer
from sqlalchemy.orm import relationship
from fairway.db.base import BaseModel


class Course(BaseModel):
    """Golf course shared across all trips."""
    __tablename__ = "courses"

    name = Column(String(200), nullable=False, unique=True, index=True)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(50), nullable=True)
    zip_code = Column(String(20), nullable=True)

    rounds = relationship("Round", back_populates="course")


class Round(BaseModel):
    """A tee time at a course on a given day of the trip."""
    __tablename__ = "rounds"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    round_date = Column(Date, nullable=False, index=True)
    tee_time = Column(Time, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="rounds")
    course = relationship("Course", back_populates="rounds")
    players = relationship("RoundPlayer", back_populates="round", cascade="all, delete-orphan", order_by="RoundPlayer.id")


class RoundPlayer(BaseModel):
    """Junction table for Round and Golfer."""
    __tablename__ = "round_players"

    round_id = Column(Integer, ForeignKey("rounds.id"), nullable=False, index=True)
    golfer_id = Column(Integer, ForeignKey("trip_golfers.id"), nullable=False, index=True)

    # Relationships
    round = relationship("Round", back_populates="players")
    golfer = relationship("Golfer")
