"""
Account routes: signup, login and logout.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session
from fairway.db.session import get_db
from fairway.schemas.user import UserCreate, UserLogin, Token, UserResponse
from fairway.models.user import User
from fairway.core.security import verify_password, get_password_hash, create_access_token
from fairway.services.invite_service import claim_pending_invites
from fairway.api.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new golfer account.

    Roster entries already invited under the same email are linked to the
    new account, so those trips show up on its dashboard right away.
    """
    email = user_data.email.lower()
    taken = db.query(User).filter(
        or_(User.username == user_data.username, User.email == email)
    ).first()
    if taken:
        detail = "Username already exists" if taken.username == user_data.username else "Email already exists"
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )

    user = User(
        username=user_data.username,
        email=email,
        full_name=user_data.full_name,
        hashed_password=get_password_hash(user_data.password)
    )
    db.add(user)
    db.flush()

    claimed = claim_pending_invites(user, db)
    db.commit()
    db.refresh(user)

    if claimed:
        logger.info(f"User {user.id} claimed {claimed} pending invitation(s)")
    return user


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Exchange username (or email) and password for a bearer token."""
    login_name = credentials.username.strip()
    user = db.query(User).filter(
        or_(User.username == login_name, User.email == login_name.lower())
    ).first()

    if not user or not verify_password(credentials.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    return {"access_token": create_access_token(data={"sub": user.username, "user_id": user.id})}


@router.post("/logout")
async def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards its copy."""
    return {"message": "Logged out successfully"}
