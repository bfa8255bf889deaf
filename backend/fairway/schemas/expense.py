"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from fairway.models.expense import SplitMethod


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    description: str
    amount: Decimal = Field(max_digits=12, decimal_places=2)  # Whole cents, as stored
    payer_id: int  # Golfer who paid
    expense_date: date
    split_method: SplitMethod = SplitMethod.EQUAL
    split_among: List[int] = []  # Golfer ids, only used for custom splits

    @field_validator("amount")
    @classmethod
    def amount_not_negative(cls, v):
        if v is not None and v < 0:
            raise ValueError("Amount cannot be negative")
        return v

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Description is required")
        return v.strip()

    @model_validator(mode="after")
    def check_split(self):
        if self.split_method == SplitMethod.CUSTOM and not self.split_among:
            raise ValueError("A custom split needs at least one golfer")
        if self.split_method == SplitMethod.EQUAL:
            self.split_among = []
        return self


class ExpenseUpdate(BaseModel):
    """Schema for expense update."""
    description: Optional[str] = None
    amount: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    payer_id: Optional[int] = None
    expense_date: Optional[date] = None
    split_method: Optional[SplitMethod] = None
    split_among: Optional[List[int]] = None

    @field_validator("amount")
    @classmethod
    def amount_not_negative(cls, v):
        if v is not None and v < 0:
            raise ValueError("Amount cannot be negative")
        return v

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v):
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Description is required")
        return v.strip()


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: int
    trip_id: int
    payer_id: int
    payer_name: str
    description: str
    amount: Decimal
    expense_date: date
    split_method: SplitMethod
    split_among: List[int] = []
    created_at: datetime

    class Config:
        from_attributes = True
