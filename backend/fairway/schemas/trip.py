"""
Pydantic schemas for Trip and roster entities.
"""
from pydantic import BaseModel, EmailStr, field_validator, model_validator
from typing import List, Optional
from datetime import date, datetime
from fairway.models.trip import GolferStatus


class TripBase(BaseModel):
    """Base trip schema."""
    trip_name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    location: Optional[str] = None


class TripCreate(TripBase):
    """Schema for trip creation."""

    @field_validator("trip_name")
    @classmethod
    def trip_name_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Trip name is required")
        return v.strip()

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class TripUpdate(BaseModel):
    """Schema for trip update."""
    trip_name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    location: Optional[str] = None


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    owner_id: int
    date_range: str = ""  # e.g. "Feb 27 – Mar 9, 2026"
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class GolferCreate(BaseModel):
    """Schema for adding a golfer to the roster."""
    name: str
    handicap: int = 0
    email: Optional[EmailStr] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Golfer name is required")
        return v.strip()


class GolferUpdate(BaseModel):
    """Schema for editing a roster entry."""
    name: Optional[str] = None
    handicap: Optional[int] = None
    email: Optional[EmailStr] = None
    status: Optional[GolferStatus] = None


class GolferResponse(BaseModel):
    """Schema for roster entry response."""
    id: int
    trip_id: int
    user_id: Optional[int] = None
    name: str
    email: Optional[str] = None
    handicap: int
    is_driving: bool
    status: GolferStatus

    class Config:
        from_attributes = True


class TripDetailResponse(TripResponse):
    """Schema for detailed trip response with roster."""
    golfers: List[GolferResponse] = []


class GolferInvite(BaseModel):
    """Schema for inviting a roster entry by email."""
    email: EmailStr


class InviteAccept(BaseModel):
    """Schema for accepting an invitation link."""
    token: str
