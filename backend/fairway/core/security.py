"""
Security utilities for JWT authentication, invitation tokens and password hashing.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import bcrypt
from jose import JWTError, jwt
from fairway.core.config import settings

INVITE_TOKEN_TYPE = "invite"


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    The 32-byte digest stays under bcrypt's 72-byte input limit.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pre_hashed = _pre_hash_password(plain_password)
    return bcrypt.checkpw(pre_hashed, hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt and return it as a string for storage."""
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pre_hashed, salt)
    return hashed.decode('utf-8')


def _encode(data: dict, expire: datetime) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    return _encode(data, datetime.now(timezone.utc) + expires_delta)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and verify a JWT token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") == INVITE_TOKEN_TYPE:
        # Invitation links must never work as session tokens
        return None
    return payload


def create_invite_token(trip_id: int, golfer_id: int, email: str) -> str:
    """Create a signed token embedded in trip invitation links."""
    expire = datetime.now(timezone.utc) + timedelta(days=settings.INVITE_TOKEN_EXPIRE_DAYS)
    return _encode(
        {"type": INVITE_TOKEN_TYPE, "trip_id": trip_id, "golfer_id": golfer_id, "email": email},
        expire
    )


def decode_invite_token(token: str) -> Optional[dict]:
    """Decode an invitation token; returns None when invalid, expired or not an invite."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != INVITE_TOKEN_TYPE:
        return None
    return payload
