"""
Trip and roster management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.orm import Session
from typing import List
from datetime import date
from fairway.db.session import get_db
from fairway.core.exceptions import ExternalServiceError
from fairway.models.user import User
from fairway.models.trip import Trip, Golfer, GolferStatus
from fairway.models.golf import RoundPlayer
from fairway.schemas.trip import (
    TripCreate, TripUpdate, TripResponse, TripDetailResponse,
    GolferCreate, GolferUpdate, GolferResponse, GolferInvite
)
from fairway.services.expense_service import golfer_has_expenses
from fairway.services.invite_service import invite_golfer, mark_invites_accepted
from fairway.api.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])


def check_trip_access(trip_id: int, user_id: int, db: Session) -> Trip:
    """Check if user owns the trip or is on its roster."""
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )

    if trip.owner_id == user_id:
        return trip

    golfer = db.query(Golfer).filter(
        Golfer.trip_id == trip_id,
        Golfer.user_id == user_id
    ).first()

    if not golfer or golfer.status == GolferStatus.DECLINED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied to this trip"
        )

    return trip


def check_trip_owner(trip_id: int, user_id: int, db: Session) -> Trip:
    """Only the organizer may perform this action."""
    trip = check_trip_access(trip_id, user_id, db)
    if trip.owner_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the trip organizer can do this"
        )
    return trip


def get_trip_golfer(trip_id: int, golfer_id: int, db: Session) -> Golfer:
    """Fetch a roster entry belonging to the trip."""
    golfer = db.query(Golfer).filter(
        Golfer.id == golfer_id,
        Golfer.trip_id == trip_id
    ).first()
    if not golfer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Golfer not found"
        )
    return golfer


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new trip and put the organizer on its roster."""
    new_trip = Trip(
        owner_id=current_user.id,
        trip_name=trip_data.trip_name,
        start_date=trip_data.start_date,
        end_date=trip_data.end_date,
        location=trip_data.location
    )
    db.add(new_trip)
    db.flush()

    organizer = Golfer(
        trip_id=new_trip.id,
        user_id=current_user.id,
        name=current_user.full_name or "Organizer",
        email=current_user.email,
        handicap=current_user.handicap or 0,
        status=GolferStatus.ACCEPTED
    )
    db.add(organizer)
    db.commit()
    db.refresh(new_trip)

    logger.info(f"User {current_user.id} created trip {new_trip.id}")
    return new_trip


@router.get("", response_model=List[TripResponse])
async def list_trips(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List trips the user owns or is on the roster of, earliest first."""
    member_trip_ids = select(Golfer.trip_id).where(
        Golfer.user_id == current_user.id,
        Golfer.status != GolferStatus.DECLINED
    )
    trips = db.query(Trip).filter(
        or_(Trip.owner_id == current_user.id, Trip.id.in_(member_trip_ids))
    ).all()
    return sorted(trips, key=lambda t: (t.start_date or date.min, t.id))


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trip details with its roster. Opening the trip accepts a pending invite."""
    trip = check_trip_access(trip_id, current_user.id, db)
    mark_invites_accepted(trip_id, current_user.id, db)
    db.refresh(trip)
    return trip


@router.patch("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update trip name, dates or location."""
    trip = check_trip_owner(trip_id, current_user.id, db)

    for field, value in trip_data.model_dump(exclude_unset=True).items():
        if field == "trip_name" and (value is None or not value.strip()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Trip name is required"
            )
        setattr(trip, field, value)

    if trip.start_date and trip.end_date and trip.end_date < trip.start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date cannot be before start_date"
        )

    db.commit()
    db.refresh(trip)
    return trip


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a trip and everything scheduled on it."""
    trip = check_trip_owner(trip_id, current_user.id, db)
    db.delete(trip)
    db.commit()
    return {"message": "Trip deleted successfully"}


@router.get("/{trip_id}/golfers", response_model=List[GolferResponse])
async def list_golfers(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the trip roster."""
    check_trip_access(trip_id, current_user.id, db)
    return db.query(Golfer).filter(Golfer.trip_id == trip_id).order_by(Golfer.id).all()


@router.post("/{trip_id}/golfers", response_model=GolferResponse, status_code=status.HTTP_201_CREATED)
async def add_golfer(
    trip_id: int,
    golfer_data: GolferCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a golfer to the roster (no account needed)."""
    check_trip_access(trip_id, current_user.id, db)

    golfer = Golfer(
        trip_id=trip_id,
        name=golfer_data.name,
        handicap=golfer_data.handicap,
        email=golfer_data.email.lower() if golfer_data.email else None,
        status=GolferStatus.ACCEPTED
    )
    db.add(golfer)
    db.commit()
    db.refresh(golfer)
    return golfer


@router.patch("/{trip_id}/golfers/{golfer_id}", response_model=GolferResponse)
async def update_golfer(
    trip_id: int,
    golfer_id: int,
    golfer_data: GolferUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Edit a roster entry."""
    check_trip_access(trip_id, current_user.id, db)
    golfer = get_trip_golfer(trip_id, golfer_id, db)

    for field, value in golfer_data.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        if field == "name" and not value.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Golfer name is required"
            )
        setattr(golfer, field, value)

    db.commit()
    db.refresh(golfer)
    return golfer


@router.delete("/{trip_id}/golfers/{golfer_id}")
async def remove_golfer(
    trip_id: int,
    golfer_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a golfer from the roster."""
    trip = check_trip_access(trip_id, current_user.id, db)
    golfer = get_trip_golfer(trip_id, golfer_id, db)

    if golfer.user_id == trip.owner_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The organizer cannot be removed from the roster"
        )
    if golfer_has_expenses(golfer_id, db):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Golfer is part of recorded expenses; edit or delete those first"
        )

    db.query(RoundPlayer).filter(RoundPlayer.golfer_id == golfer_id).delete(synchronize_session=False)
    db.delete(golfer)
    db.commit()

    return {"message": "Golfer removed successfully"}


@router.post("/{trip_id}/golfers/{golfer_id}/invite")
async def send_invite(
    trip_id: int,
    golfer_id: int,
    invite: GolferInvite,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Invite a roster entry by email so they can join the trip."""
    trip = check_trip_access(trip_id, current_user.id, db)
    golfer = get_trip_golfer(trip_id, golfer_id, db)

    try:
        sent = await invite_golfer(trip, golfer, invite.email, db)
    except ExternalServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Invite could not be sent: {e}"
        )

    return {
        "message": f"Invite sent to {golfer.email}" if sent else "Invite recorded; email delivery is not configured",
        "email_sent": sent
    }


@router.post("/{trip_id}/golfers/{golfer_id}/driving", response_model=GolferResponse)
async def toggle_driving(
    trip_id: int,
    golfer_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Toggle whether a golfer travels by car instead of flying."""
    check_trip_access(trip_id, current_user.id, db)
    golfer = get_trip_golfer(trip_id, golfer_id, db)

    golfer.is_driving = not golfer.is_driving
    db.commit()
    db.refresh(golfer)
    return golfer
