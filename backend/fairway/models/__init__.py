"""Models package - Import all models for SQLAlchemy registration."""
from fairway.models.user import User
from fairway.models.trip import Trip, Golfer, GolferStatus
from fairway.models.expense import Expense, ExpenseSplit, SplitMethod
from fairway.models.golf import Course, Round, RoundPlayer
from fairway.models.lodging import Lodging
from fairway.models.dining import Dining
from fairway.models.flight import Flight, LegType

__all__ = [
    "User",
    "Trip",
    "Golfer",
    "GolferStatus",
    "Expense",
    "ExpenseSplit",
    "SplitMethod",
    "Course",
    "Round",
    "RoundPlayer",
    "Lodging",
    "Dining",
    "Flight",
    "LegType",
]
