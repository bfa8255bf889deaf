"""
Invitation acceptance route.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from fairway.db.session import get_db
from fairway.core.security import decode_invite_token
from fairway.models.user import User
from fairway.models.trip import Golfer
from fairway.schemas.trip import InviteAccept, GolferResponse
from fairway.services.invite_service import accept_invite
from fairway.api.dependencies import get_current_user

router = APIRouter(prefix="/invitations", tags=["invitations"])


@router.post("/accept", response_model=GolferResponse)
async def accept_invitation(
    data: InviteAccept,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Join a trip from an emailed invitation link."""
    payload = decode_invite_token(data.token)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invitation link is invalid or has expired"
        )

    golfer = db.query(Golfer).filter(
        Golfer.id == payload["golfer_id"],
        Golfer.trip_id == payload["trip_id"]
    ).first()
    if not golfer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invitation no longer exists"
        )

    if golfer.user_id is not None and golfer.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Invitation was already accepted by another account"
        )

    already_on_trip = db.query(Golfer).filter(
        Golfer.trip_id == golfer.trip_id,
        Golfer.user_id == current_user.id,
        Golfer.id != golfer.id
    ).first()
    if already_on_trip:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="You are already on this trip's roster"
        )

    return accept_invite(golfer, current_user, db)
