"""
Golf itinerary routes: course search, rounds and tee-time weather.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload
from typing import List
from fairway.db.session import get_db
from fairway.core.utils import format_single_date, format_time
from fairway.models.user import User
from fairway.models.golf import Course, Round, RoundPlayer
from fairway.models.trip import Golfer
from fairway.schemas.golf import (
    CourseBase, CourseResponse, RoundCreate, RoundUpdate, RoundResponse,
    RoundPlayerResponse, RoundWeather
)
from fairway.services.weather_service import round_weather
from fairway.api.dependencies import get_current_user
from fairway.api.routes.trips import check_trip_access

router = APIRouter(tags=["golf"])


def get_or_create_course(course_data: CourseBase, db: Session) -> Course:
    """Reuse a course with the same name (case-insensitive) or create it."""
    course = db.query(Course).filter(
        func.lower(Course.name) == course_data.name.lower()
    ).first()
    if course:
        return course

    course = Course(**course_data.model_dump())
    db.add(course)
    db.flush()
    return course


def set_players(rnd: Round, golfer_ids: List[int], db: Session):
    """Replace a round's pairing; every golfer must be on the trip roster."""
    roster_ids = {row.id for row in db.query(Golfer.id).filter(Golfer.trip_id == rnd.trip_id).all()}
    unknown = [gid for gid in golfer_ids if gid not in roster_ids]
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Golfers {unknown} are not on this trip's roster"
        )

    rnd.players.clear()
    for golfer_id in dict.fromkeys(golfer_ids):
        rnd.players.append(RoundPlayer(golfer_id=golfer_id))


def to_round_response(rnd: Round) -> RoundResponse:
    return RoundResponse(
        id=rnd.id,
        trip_id=rnd.trip_id,
        round_date=rnd.round_date,
        tee_time=rnd.tee_time,
        date_label=format_single_date(rnd.round_date),
        tee_time_label=format_time(rnd.tee_time),
        course=CourseResponse.model_validate(rnd.course),
        players=[
            RoundPlayerResponse(id=p.golfer.id, name=p.golfer.name, handicap=p.golfer.handicap)
            for p in rnd.players
        ]
    )


def get_trip_round(trip_id: int, round_id: int, db: Session) -> Round:
    """Fetch a round belonging to the trip."""
    rnd = db.query(Round).filter(Round.id == round_id, Round.trip_id == trip_id).first()
    if not rnd:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Round not found"
        )
    return rnd


@router.get("/courses", response_model=List[CourseResponse])
async def search_courses(
    q: str = Query("", description="Part of the course name"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Search courses by name; needs at least two characters."""
    q = q.strip()
    if len(q) < 2:
        return []
    return db.query(Course).filter(
        func.lower(Course.name).contains(q.lower())
    ).order_by(Course.name).limit(5).all()


@router.get("/trips/{trip_id}/rounds", response_model=List[RoundResponse])
async def list_rounds(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the golf itinerary ordered by date and tee time."""
    check_trip_access(trip_id, current_user.id, db)

    rounds = db.query(Round).options(
        selectinload(Round.course),
        selectinload(Round.players).selectinload(RoundPlayer.golfer)
    ).filter(Round.trip_id == trip_id).order_by(Round.round_date, Round.tee_time).all()

    return [to_round_response(r) for r in rounds]


@router.post("/trips/{trip_id}/rounds", response_model=RoundResponse, status_code=status.HTTP_201_CREATED)
async def create_round(
    trip_id: int,
    round_data: RoundCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Schedule a round."""
    check_trip_access(trip_id, current_user.id, db)

    course = get_or_create_course(round_data.course, db)
    rnd = Round(
        trip_id=trip_id,
        course_id=course.id,
        round_date=round_data.round_date,
        tee_time=round_data.tee_time
    )
    db.add(rnd)
    db.flush()
    set_players(rnd, round_data.golfer_ids, db)

    db.commit()
    db.refresh(rnd)
    return to_round_response(rnd)


@router.patch("/trips/{trip_id}/rounds/{round_id}", response_model=RoundResponse)
async def update_round(
    trip_id: int,
    round_id: int,
    round_data: RoundUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Edit a round; golfer_ids, when given, replaces the pairing."""
    check_trip_access(trip_id, current_user.id, db)
    rnd = get_trip_round(trip_id, round_id, db)

    if round_data.course is not None:
        rnd.course_id = get_or_create_course(round_data.course, db).id
    if round_data.round_date is not None:
        rnd.round_date = round_data.round_date
    if round_data.tee_time is not None:
        rnd.tee_time = round_data.tee_time
    if round_data.golfer_ids is not None:
        set_players(rnd, round_data.golfer_ids, db)

    db.commit()
    db.refresh(rnd)
    return to_round_response(rnd)


@router.delete("/trips/{trip_id}/rounds/{round_id}")
async def delete_round(
    trip_id: int,
    round_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a round from the itinerary."""
    check_trip_access(trip_id, current_user.id, db)
    rnd = get_trip_round(trip_id, round_id, db)

    db.delete(rnd)
    db.commit()

    return {"message": "Round deleted successfully"}


@router.get("/trips/{trip_id}/rounds/weather", response_model=List[RoundWeather])
async def get_round_weather(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Forecast for each round's tee time."""
    check_trip_access(trip_id, current_user.id, db)

    rounds = db.query(Round).options(
        selectinload(Round.course)
    ).filter(Round.trip_id == trip_id).order_by(Round.round_date, Round.tee_time).all()

    forecasts = {}
    return [await round_weather(r, forecasts) for r in rounds]
