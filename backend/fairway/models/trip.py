"""
Trip and roster models.
"""
from sqlalchemy import Column, String, Date, Boolean, Enum as SQLEnum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from fairway.db.base import BaseModel
from fairway.core.utils import format_trip_dates
import enum


class GolferStatus(str, enum.Enum):
    """Invitation state of a roster entry."""
    ACCEPTED = "accepted"
    INVITED = "invited"
    DECLINED = "declined"


class Trip(BaseModel):
    """Trip owned by one user and shared with its roster."""
    __tablename__ = "trips"

    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    trip_name = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=True, index=True)
    end_date = Column(Date, nullable=True)
    location = Column(String(200), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="owned_trips")
    golfers = relationship("Golfer", back_populates="trip", cascade="all, delete-orphan", order_by="Golfer.id")
    expenses = relationship("Expense", back_populates="trip", cascade="all, delete-orphan")
    rounds = relationship("Round", back_populates="trip", cascade="all, delete-orphan")
    lodging = relationship("Lodging", back_populates="trip", cascade="all, delete-orphan")
    dining = relationship("Dining", back_populates="trip", cascade="all, delete-orphan")
    flights = relationship("Flight", back_populates="trip", cascade="all, delete-orphan")

    @property
    def date_range(self) -> str:
        return format_trip_dates(self.start_date, self.end_date)


class Golfer(BaseModel):
    """
    Roster entry for a trip.

    A golfer may exist without an account (user_id is null) until an
    invitation links it to a user.
    """
    __tablename__ = "trip_golfers"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=True)
    handicap = Column(Integer, nullable=False, default=0)
    is_driving = Column(Boolean, nullable=False, default=False)
    status = Column(SQLEnum(GolferStatus), nullable=False, default=GolferStatus.ACCEPTED)

    # Relationships
    trip = relationship("Trip", back_populates="golfers")
    user = relationship("User", back_populates="golfers")
    flights = relationship("Flight", back_populates="golfer", cascade="all, delete-orphan")
