"""
Pydantic schemas for Lodging entity.
"""
from pydantic import BaseModel, field_validator, model_validator
from typing import Optional
from datetime import datetime
from fairway.core.utils import parse_local_datetime


class LodgingBase(BaseModel):
    """Base lodging schema."""
    name: str
    street_address: str = ""
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    website_url: Optional[str] = None


class LodgingCreate(LodgingBase):
    """Schema for lodging creation. Times are local to the destination."""
    check_in_time: datetime
    check_out_time: datetime

    @field_validator("check_in_time", "check_out_time", mode="before")
    @classmethod
    def parse_wall_clock(cls, v):
        return parse_local_datetime(v) if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_order(self):
        if self.check_out_time < self.check_in_time:
            raise ValueError("Check-out cannot be before check-in")
        return self


class LodgingUpdate(BaseModel):
    """Schema for lodging update."""
    name: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    website_url: Optional[str] = None
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None

    @field_validator("check_in_time", "check_out_time", mode="before")
    @classmethod
    def parse_wall_clock(cls, v):
        return parse_local_datetime(v) if isinstance(v, str) else v


class LodgingResponse(LodgingBase):
    """Schema for lodging response."""
    id: int
    trip_id: int
    check_in_time: datetime
    check_out_time: datetime

    class Config:
        from_attributes = True
