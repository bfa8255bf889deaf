"""
Pydantic schemas for settlement results.
"""
from pydantic import BaseModel
from typing import List
from decimal import Decimal


class GolferBalance(BaseModel):
    """What one golfer paid, consumed and nets out to."""
    golfer_id: int
    name: str
    paid: Decimal
    owed: Decimal
    net: Decimal  # Positive = should receive, negative = should pay


class Transfer(BaseModel):
    """Schema for a single transfer in settlement."""
    from_golfer_id: int
    from_name: str
    to_golfer_id: int
    to_name: str
    amount: Decimal


class SettlementSummary(BaseModel):
    """Schema for a trip's settlement, recomputed on every request."""
    trip_id: int
    total_expenses: Decimal
    participant_count: int
    balances: List[GolferBalance]
    transfers: List[Transfer]
    summary: str
