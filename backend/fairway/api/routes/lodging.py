"""
Lodging routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from fairway.db.session import get_db
from fairway.models.user import User
from fairway.models.lodging import Lodging
from fairway.schemas.lodging import LodgingCreate, LodgingUpdate, LodgingResponse
from fairway.api.dependencies import get_current_user
from fairway.api.routes.trips import check_trip_access

router = APIRouter(prefix="/trips/{trip_id}/lodging", tags=["lodging"])


def get_trip_lodging(trip_id: int, lodging_id: int, db: Session) -> Lodging:
    lodging = db.query(Lodging).filter(Lodging.id == lodging_id, Lodging.trip_id == trip_id).first()
    if not lodging:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lodging not found"
        )
    return lodging


@router.get("", response_model=List[LodgingResponse])
async def list_lodging(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get lodging ordered by check-in."""
    check_trip_access(trip_id, current_user.id, db)
    return db.query(Lodging).filter(Lodging.trip_id == trip_id).order_by(Lodging.check_in_time).all()


@router.post("", response_model=LodgingResponse, status_code=status.HTTP_201_CREATED)
async def add_lodging(
    trip_id: int,
    lodging_data: LodgingCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a place to stay."""
    check_trip_access(trip_id, current_user.id, db)

    lodging = Lodging(trip_id=trip_id, **lodging_data.model_dump())
    db.add(lodging)
    db.commit()
    db.refresh(lodging)
    return lodging


@router.patch("/{lodging_id}", response_model=LodgingResponse)
async def update_lodging(
    trip_id: int,
    lodging_id: int,
    lodging_data: LodgingUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Edit a lodging entry."""
    check_trip_access(trip_id, current_user.id, db)
    lodging = get_trip_lodging(trip_id, lodging_id, db)

    for field, value in lodging_data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(lodging, field, value)

    if lodging.check_out_time < lodging.check_in_time:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Check-out cannot be before check-in"
        )

    db.commit()
    db.refresh(lodging)
    return lodging


@router.delete("/{lodging_id}")
async def delete_lodging(
    trip_id: int,
    lodging_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a lodging entry."""
    check_trip_access(trip_id, current_user.id, db)
    lodging = get_trip_lodging(trip_id, lodging_id, db)

    db.delete(lodging)
    db.commit()

    return {"message": "Lodging deleted successfully"}
