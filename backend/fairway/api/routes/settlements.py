"""
Settlement routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from fairway.db.session import get_db
from fairway.models.user import User
from fairway.schemas.settlement import SettlementSummary
from fairway.services.settlement_service import calculate_trip_settlement
from fairway.api.dependencies import get_current_user
from fairway.api.routes.trips import check_trip_access

router = APIRouter(prefix="/trips/{trip_id}/settlement", tags=["settlement"])


@router.get("", response_model=SettlementSummary)
async def get_settlement(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Balances and the transfers that settle them, computed from the current ledger."""
    check_trip_access(trip_id, current_user.id, db)
    return calculate_trip_settlement(trip_id, db)
