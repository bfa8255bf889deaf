"""
Expense management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, selectinload
from typing import List
from fairway.db.session import get_db
from fairway.models.user import User
from fairway.models.expense import Expense
from fairway.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from fairway.services.expense_service import create_expense, update_expense
from fairway.api.dependencies import get_current_user
from fairway.api.routes.trips import check_trip_access

router = APIRouter(prefix="/trips/{trip_id}/expenses", tags=["expenses"])


def get_trip_expense(trip_id: int, expense_id: int, db: Session) -> Expense:
    """Fetch an expense belonging to the trip."""
    expense = db.query(Expense).filter(
        Expense.id == expense_id,
        Expense.trip_id == trip_id
    ).first()
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    return expense


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the expense ledger, most recent first."""
    check_trip_access(trip_id, current_user.id, db)

    return db.query(Expense).options(
        selectinload(Expense.payer),
        selectinload(Expense.splits)
    ).filter(
        Expense.trip_id == trip_id
    ).order_by(Expense.expense_date.desc(), Expense.id.desc()).all()


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def add_expense(
    trip_id: int,
    expense_data: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record a shared expense."""
    check_trip_access(trip_id, current_user.id, db)
    return create_expense(trip_id, expense_data, db)


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    trip_id: int,
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a single expense."""
    check_trip_access(trip_id, current_user.id, db)
    return get_trip_expense(trip_id, expense_id, db)


@router.patch("/{expense_id}", response_model=ExpenseResponse)
async def edit_expense(
    trip_id: int,
    expense_id: int,
    expense_data: ExpenseUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update an expense and its split."""
    check_trip_access(trip_id, current_user.id, db)
    expense = get_trip_expense(trip_id, expense_id, db)
    return update_expense(expense, expense_data, db)


@router.delete("/{expense_id}")
async def delete_expense(
    trip_id: int,
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an expense."""
    check_trip_access(trip_id, current_user.id, db)
    expense = get_trip_expense(trip_id, expense_id, db)

    db.delete(expense)
    db.commit()

    return {"message": "Expense deleted successfully"}
