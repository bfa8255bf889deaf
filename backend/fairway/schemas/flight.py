"""
Pydantic schemas for flights and the arrivals/departures board.
"""
from pydantic import BaseModel, field_validator
from typing import List, Optional
from datetime import datetime
from fairway.core.utils import parse_local_datetime
from fairway.models.flight import LegType


class FlightCreate(BaseModel):
    """Schema for flight creation. Times are local wall-clock values."""
    golfer_id: int
    leg_type: LegType
    airline: str = ""
    flight_number: str = ""
    departure_airport: str = ""
    arrival_airport: str = ""
    departure_time: datetime
    arrival_time: datetime

    @field_validator("departure_time", "arrival_time", mode="before")
    @classmethod
    def parse_wall_clock(cls, v):
        return parse_local_datetime(v) if isinstance(v, str) else v

    @field_validator("departure_airport", "arrival_airport")
    @classmethod
    def upper_airport(cls, v):
        return v.strip().upper()


class FlightUpdate(BaseModel):
    """Schema for flight update."""
    leg_type: Optional[LegType] = None
    airline: Optional[str] = None
    flight_number: Optional[str] = None
    departure_airport: Optional[str] = None
    arrival_airport: Optional[str] = None
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None

    @field_validator("departure_time", "arrival_time", mode="before")
    @classmethod
    def parse_wall_clock(cls, v):
        return parse_local_datetime(v) if isinstance(v, str) else v

    @field_validator("departure_airport", "arrival_airport")
    @classmethod
    def upper_airport(cls, v):
        return v.strip().upper() if v is not None else v


class FlightResponse(BaseModel):
    """Schema for flight response."""
    id: int
    golfer_id: int
    trip_id: int
    leg_type: LegType
    airline: str
    flight_number: str
    departure_airport: str
    arrival_airport: str
    departure_time: datetime
    arrival_time: datetime

    class Config:
        from_attributes = True


class FlightBoardEntry(BaseModel):
    """One row of the arrivals or departures board."""
    id: int
    golfer_name: str
    airline: str
    flight_number: str
    airport: str
    time: datetime
    time_label: str = ""  # e.g. "2:30 PM"


class FlightStatusResponse(BaseModel):
    """Travel readiness of the roster."""
    total_golfers: int
    arrivals_today: int
    confirmed: int  # Driving, or both legs booked
    missing_info: int
    arrivals: List[FlightBoardEntry] = []
    departures: List[FlightBoardEntry] = []
