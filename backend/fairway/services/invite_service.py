"""
Invitation service: link roster entries to accounts and email invitation links.
"""
import logging
import httpx
from sqlalchemy.orm import Session
from fairway.core.config import settings
from fairway.core.exceptions import ExternalServiceError
from fairway.core.security import create_invite_token
from fairway.models.trip import Trip, Golfer, GolferStatus
from fairway.models.user import User

logger = logging.getLogger(__name__)


def build_invite_link(token: str, trip_id: int) -> str:
    """Link the invitee follows to join the trip."""
    return f"{settings.APP_URL.rstrip('/')}/trip?id={trip_id}&invite={token}"


async def send_invite_email(email: str, golfer_name: str, trip_name: str, link: str) -> bool:
    """
    Send the invitation through the transactional email provider.

    Returns False (and logs a warning) when no API key is configured, so
    local setups can still invite without sending mail.
    """
    api_key = getattr(settings, 'EMAIL_API_KEY', '')
    if not api_key:
        logger.warning(f"EMAIL_API_KEY not configured. Skipping invitation email to {email}.")
        return False

    payload = {
        "from": settings.EMAIL_FROM,
        "to": [email],
        "subject": f"You're invited to {trip_name}",
        "html": (
            f"<p>Hi {golfer_name},</p>"
            f"<p>You've been added to the roster for <strong>{trip_name}</strong>.</p>"
            f"<p><a href=\"{link}\">Join the trip</a></p>"
        ),
    }

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.post(
                settings.EMAIL_API_URL,
                headers={
                    "Authorization": f"Bearer {api_key}",
                    "Content-Type": "application/json"
                },
                json=payload
            )
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(f"Email provider returned {e.response.status_code}: {e.response.text}")
        raise ExternalServiceError("email", f"HTTP {e.response.status_code}")
    except httpx.HTTPError as e:
        logger.error(f"Email provider request failed: {e}")
        raise ExternalServiceError("email", str(e))

    logger.info(f"Invitation email sent to {email} for trip '{trip_name}'")
    return True


async def invite_golfer(trip: Trip, golfer: Golfer, email: str, db: Session) -> bool:
    """
    Email the invitation, then mark the roster entry as invited.

    The roster entry is only touched once the provider accepted the email,
    so a failed send (ExternalServiceError) leaves it as it was. If an
    account with that email already exists the entry is linked to it right
    away. Returns whether an email was actually sent.
    """
    email = email.strip().lower()
    token = create_invite_token(trip.id, golfer.id, email)
    sent = await send_invite_email(email, golfer.name, trip.trip_name, build_invite_link(token, trip.id))

    golfer.email = email
    golfer.status = GolferStatus.INVITED
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        golfer.user_id = existing.id
    db.commit()
    return sent


def claim_pending_invites(user: User, db: Session) -> int:
    """Link unclaimed roster entries invited under the user's email. Caller commits."""
    return db.query(Golfer).filter(
        Golfer.email == user.email,
        Golfer.user_id.is_(None),
        Golfer.status == GolferStatus.INVITED
    ).update({Golfer.user_id: user.id}, synchronize_session=False)


def accept_invite(golfer: Golfer, user: User, db: Session) -> Golfer:
    """Link the accepting user to the roster entry."""
    golfer.user_id = user.id
    golfer.status = GolferStatus.ACCEPTED
    if not golfer.email:
        golfer.email = user.email
    db.commit()
    db.refresh(golfer)
    return golfer


def mark_invites_accepted(trip_id: int, user_id: int, db: Session) -> int:
    """Opening a trip accepts any pending invitation for that user."""
    count = db.query(Golfer).filter(
        Golfer.trip_id == trip_id,
        Golfer.user_id == user_id,
        Golfer.status == GolferStatus.INVITED
    ).update({Golfer.status: GolferStatus.ACCEPTED}, synchronize_session=False)
    if count:
        db.commit()
    return count
