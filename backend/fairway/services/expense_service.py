"""
Expense service for expense-related business logic.
"""
from sqlalchemy.orm import Session
from typing import List
from fairway.core.exceptions import ValidationError
from fairway.models.expense import Expense, ExpenseSplit, SplitMethod
from fairway.models.trip import Golfer
from fairway.schemas.expense import ExpenseCreate, ExpenseUpdate


def get_roster_ids(trip_id: int, db: Session) -> set:
    """Ids of every golfer on a trip's roster."""
    return {row.id for row in db.query(Golfer.id).filter(Golfer.trip_id == trip_id).all()}


def validate_expense_members(
    trip_id: int,
    payer_id: int,
    split_method: SplitMethod,
    split_among: List[int],
    db: Session
):
    """Payer and custom split members must all be on the trip roster."""
    roster_ids = get_roster_ids(trip_id, db)
    if payer_id not in roster_ids:
        raise ValidationError(f"Payer {payer_id} is not on this trip's roster")
    if split_method == SplitMethod.CUSTOM:
        if not split_among:
            raise ValidationError("A custom split needs at least one golfer")
        unknown = [gid for gid in split_among if gid not in roster_ids]
        if unknown:
            raise ValidationError(f"Golfers {unknown} are not on this trip's roster")


def replace_splits(expense: Expense, golfer_ids: List[int]):
    """Replace the custom split of an expense, dropping duplicate ids."""
    expense.splits.clear()
    seen = set()
    for golfer_id in golfer_ids:
        if golfer_id in seen:
            continue
        seen.add(golfer_id)
        expense.splits.append(ExpenseSplit(golfer_id=golfer_id))


def create_expense(trip_id: int, data: ExpenseCreate, db: Session) -> Expense:
    """Create an expense with its split."""
    validate_expense_members(trip_id, data.payer_id, data.split_method, data.split_among, db)

    expense = Expense(
        trip_id=trip_id,
        payer_id=data.payer_id,
        description=data.description,
        amount=data.amount,
        expense_date=data.expense_date,
        split_method=data.split_method
    )
    if data.split_method == SplitMethod.CUSTOM:
        replace_splits(expense, data.split_among)

    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


def update_expense(expense: Expense, data: ExpenseUpdate, db: Session) -> Expense:
    """Apply a partial update; switching to an equal split clears the member list."""
    updates = data.model_dump(exclude_unset=True)

    payer_id = updates.get("payer_id", expense.payer_id)
    split_method = updates.get("split_method") or expense.split_method
    if "split_among" in updates and updates["split_among"] is not None:
        split_among = updates["split_among"]
    else:
        split_among = [s.golfer_id for s in expense.splits]

    validate_expense_members(expense.trip_id, payer_id, split_method, split_among, db)

    for field in ("description", "amount", "payer_id", "expense_date"):
        if updates.get(field) is not None:
            setattr(expense, field, updates[field])

    expense.split_method = split_method
    replace_splits(expense, split_among if split_method == SplitMethod.CUSTOM else [])

    db.commit()
    db.refresh(expense)
    return expense


def golfer_has_expenses(golfer_id: int, db: Session) -> bool:
    """Whether a golfer paid for or shares in any expense."""
    paid = db.query(Expense.id).filter(Expense.payer_id == golfer_id).first()
    if paid:
        return True
    return db.query(ExpenseSplit.id).filter(ExpenseSplit.golfer_id == golfer_id).first() is not None
