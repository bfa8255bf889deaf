"""
Expense model for shared trip costs.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Enum as SQLEnum
from sqlalchemy.orm import relationship
from fairway.db.base import BaseModel
import enum


class SplitMethod(str, enum.Enum):
    """How an expense is divided."""
    EQUAL = "equal"    # Everyone on the roster at settlement time
    CUSTOM = "custom"  # Only the golfers listed in expense_splits


class Expense(BaseModel):
    """A single payment made by one golfer on behalf of the group."""
    __tablename__ = "trip_expenses"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    payer_id = Column(Integer, ForeignKey("trip_golfers.id"), nullable=False, index=True)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    expense_date = Column(Date, nullable=False, index=True)
    split_method = Column(SQLEnum(SplitMethod), nullable=False, default=SplitMethod.EQUAL)

    # Relationships
    trip = relationship("Trip", back_populates="expenses")
    payer = relationship("Golfer", foreign_keys=[payer_id])
    splits = relationship("ExpenseSplit", back_populates="expense", cascade="all, delete-orphan", order_by="ExpenseSplit.id")

    @property
    def payer_name(self) -> str:
        return self.payer.name if self.payer else ""

    @property
    def split_among(self):
        """Golfer ids of a custom split, empty for an equal split."""
        if self.split_method != SplitMethod.CUSTOM:
            return []
        return [s.golfer_id for s in self.splits]


class ExpenseSplit(BaseModel):
    """Junction table for Expense and Golfer in a custom split."""
    __tablename__ = "expense_splits"

    expense_id = Column(Integer, ForeignKey("trip_expenses.id"), nullable=False, index=True)
    golfer_id = Column(Integer, ForeignKey("trip_golfers.id"), nullable=False, index=True)

    # Relationships
    expense = relationship("Expense", back_populates="splits")
    golfer = relationship("Golfer")
