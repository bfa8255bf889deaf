"""
Flight coordination routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, selectinload
from typing import List
from fairway.db.session import get_db
from fairway.models.user import User
from fairway.models.flight import Flight
from fairway.models.trip import Golfer
from fairway.schemas.flight import FlightCreate, FlightUpdate, FlightResponse, FlightStatusResponse
from fairway.services.flight_service import build_flight_status
from fairway.api.dependencies import get_current_user
from fairway.api.routes.trips import check_trip_access, get_trip_golfer

router = APIRouter(prefix="/trips/{trip_id}/flights", tags=["flights"])


def get_trip_flight(trip_id: int, flight_id: int, db: Session) -> Flight:
    flight = db.query(Flight).filter(Flight.id == flight_id, Flight.trip_id == trip_id).first()
    if not flight:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Flight not found"
        )
    return flight


@router.get("", response_model=List[FlightResponse])
async def list_flights(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get every flight leg on the trip."""
    check_trip_access(trip_id, current_user.id, db)
    return db.query(Flight).filter(Flight.trip_id == trip_id).order_by(Flight.departure_time).all()


@router.get("/status", response_model=FlightStatusResponse)
async def get_flight_status(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Arrivals today, confirmed travellers and the arrival/departure boards."""
    check_trip_access(trip_id, current_user.id, db)

    golfers = db.query(Golfer).options(
        selectinload(Golfer.flights)
    ).filter(Golfer.trip_id == trip_id).order_by(Golfer.id).all()

    return build_flight_status(golfers)


@router.post("", response_model=FlightResponse, status_code=status.HTTP_201_CREATED)
async def add_flight(
    trip_id: int,
    flight_data: FlightCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a flight leg for a golfer."""
    check_trip_access(trip_id, current_user.id, db)
    get_trip_golfer(trip_id, flight_data.golfer_id, db)

    flight = Flight(trip_id=trip_id, **flight_data.model_dump())
    db.add(flight)
    db.commit()
    db.refresh(flight)
    return flight


@router.patch("/{flight_id}", response_model=FlightResponse)
async def update_flight(
    trip_id: int,
    flight_id: int,
    flight_data: FlightUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Edit a flight leg."""
    check_trip_access(trip_id, current_user.id, db)
    flight = get_trip_flight(trip_id, flight_id, db)

    for field, value in flight_data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(flight, field, value)

    db.commit()
    db.refresh(flight)
    return flight


@router.delete("/{flight_id}")
async def delete_flight(
    trip_id: int,
    flight_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a flight leg."""
    check_trip_access(trip_id, current_user.id, db)
    flight = get_trip_flight(trip_id, flight_id, db)

    db.delete(flight)
    db.commit()

    return {"message": "Flight deleted successfully"}
