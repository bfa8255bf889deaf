"""
User profile routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from fairway.db.session import get_db
from fairway.schemas.user import UserResponse, ProfileUpdate
from fairway.models.user import User
from fairway.models.trip import Golfer
from fairway.api.dependencies import get_current_user

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_profile(
    profile: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Complete the golfer profile; the name is copied onto the user's roster entries."""
    if profile.full_name is not None:
        current_user.full_name = profile.full_name
        db.query(Golfer).filter(Golfer.user_id == current_user.id).update(
            {Golfer.name: profile.full_name}, synchronize_session=False
        )
    if profile.handicap is not None:
        current_user.handicap = profile.handicap

    db.commit()
    db.refresh(current_user)
    return current_user
