"""
Pydantic schemas for courses, rounds and round weather.
"""
from pydantic import BaseModel, field_validator
from typing import List, Optional
from datetime import date, time


class CourseBase(BaseModel):
    """Base course schema."""
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Course name is required")
        return v.strip()


class CourseResponse(CourseBase):
    """Schema for course response."""
    id: int

    class Config:
        from_attributes = True


class RoundCreate(BaseModel):
    """Schema for scheduling a round; the course is matched by name or created."""
    course: CourseBase
    round_date: date
    tee_time: time
    golfer_ids: List[int] = []


class RoundUpdate(BaseModel):
    """Schema for editing a round. golfer_ids replaces the whole pairing."""
    course: Optional[CourseBase] = None
    round_date: Optional[date] = None
    tee_time: Optional[time] = None
    golfer_ids: Optional[List[int]] = None


class RoundPlayerResponse(BaseModel):
    """Golfer playing in a round."""
    id: int
    name: str
    handicap: int


class RoundResponse(BaseModel):
    """Schema for round response."""
    id: int
    trip_id: int
    round_date: date
    tee_time: time
    course: CourseResponse
    players: List[RoundPlayerResponse] = []
    date_label: str = ""  # e.g. "Fri, Feb 27"
    tee_time_label: str = ""  # e.g. "8:10 AM"


class RoundWeather(BaseModel):
    """Forecast nearest to a round's tee time."""
    round_id: int
    course_name: str
    date: date
    tee_time: time
    temp: Optional[int] = None
    description: str = ""
    icon: str = ""
    wind_speed: Optional[int] = None
    pop: Optional[float] = None  # Probability of precipitation, 0-1
    is_too_far: bool = False  # Round is beyond the forecast window
