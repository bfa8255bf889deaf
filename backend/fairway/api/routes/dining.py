"""
Dining reservation routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from fairway.db.session import get_db
from fairway.models.user import User
from fairway.models.dining import Dining
from fairway.schemas.dining import DiningCreate, DiningUpdate, DiningResponse
from fairway.api.dependencies import get_current_user
from fairway.api.routes.trips import check_trip_access

router = APIRouter(prefix="/trips/{trip_id}/dining", tags=["dining"])


def get_trip_dining(trip_id: int, dining_id: int, db: Session) -> Dining:
    dining = db.query(Dining).filter(Dining.id == dining_id, Dining.trip_id == trip_id).first()
    if not dining:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reservation not found"
        )
    return dining


@router.get("", response_model=List[DiningResponse])
async def list_dining(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get reservations ordered by time."""
    check_trip_access(trip_id, current_user.id, db)
    return db.query(Dining).filter(Dining.trip_id == trip_id).order_by(Dining.reservation_time).all()


@router.post("", response_model=DiningResponse, status_code=status.HTTP_201_CREATED)
async def add_dining(
    trip_id: int,
    dining_data: DiningCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a reservation."""
    check_trip_access(trip_id, current_user.id, db)

    dining = Dining(trip_id=trip_id, **dining_data.model_dump())
    db.add(dining)
    db.commit()
    db.refresh(dining)
    return dining


@router.patch("/{dining_id}", response_model=DiningResponse)
async def update_dining(
    trip_id: int,
    dining_id: int,
    dining_data: DiningUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Edit a reservation."""
    check_trip_access(trip_id, current_user.id, db)
    dining = get_trip_dining(trip_id, dining_id, db)

    updates = dining_data.model_dump(exclude_unset=True)
    if updates.get("party_size") is not None and updates["party_size"] < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Party size cannot be negative"
        )
    for field, value in updates.items():
        if value is not None:
            setattr(dining, field, value)

    db.commit()
    db.refresh(dining)
    return dining


@router.delete("/{dining_id}")
async def delete_dining(
    trip_id: int,
    dining_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a reservation."""
    check_trip_access(trip_id, current_user.id, db)
    dining = get_trip_dining(trip_id, dining_id, db)

    db.delete(dining)
    db.commit()

    return {"message": "Reservation deleted successfully"}
