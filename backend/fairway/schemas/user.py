"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    """Base user schema."""
    username: str
    email: EmailStr


class UserCreate(UserBase):
    """Schema for user creation."""
    password: str
    full_name: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Schema for completing or editing the golfer profile."""
    full_name: Optional[str] = None
    handicap: Optional[int] = None

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Please enter your full name")
        return v.strip() if v else v


class UserResponse(UserBase):
    """Schema for user response."""
    id: int
    full_name: Optional[str] = None
    handicap: Optional[int] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    """Schema for user login."""
    username: str  # Username or email
    password: str


class Token(BaseModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"
