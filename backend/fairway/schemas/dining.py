"""
Pydantic schemas for Dining entity.
"""
from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from fairway.core.utils import parse_local_datetime


class DiningBase(BaseModel):
    """Base dining schema."""
    name: str
    street_address: str = ""
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    website_url: Optional[str] = None
    party_size: int = 0


class DiningCreate(DiningBase):
    """Schema for reservation creation. The time is local to the restaurant."""
    reservation_time: datetime

    @field_validator("reservation_time", mode="before")
    @classmethod
    def parse_wall_clock(cls, v):
        return parse_local_datetime(v) if isinstance(v, str) else v

    @field_validator("party_size")
    @classmethod
    def party_size_not_negative(cls, v):
        if v < 0:
            raise ValueError("Party size cannot be negative")
        return v


class DiningUpdate(BaseModel):
    """Schema for reservation update."""
    name: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    website_url: Optional[str] = None
    party_size: Optional[int] = None
    reservation_time: Optional[datetime] = None

    @field_validator("reservation_time", mode="before")
    @classmethod
    def parse_wall_clock(cls, v):
        return parse_local_datetime(v) if isinstance(v, str) else v


class DiningResponse(DiningBase):
    """Schema for reservation response."""
    id: int
    trip_id: int
    reservation_time: datetime

    class Config:
        from_attributes = True
