"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from fairway.api.routes import (
    auth, users, trips, invitations, expenses, settlements,
    golf, lodging, dining, flights
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(trips.router)
api_router.include_router(invitations.router)
api_router.include_router(expenses.router)
api_router.include_router(settlements.router)
api_router.include_router(golf.router)
api_router.include_router(lodging.router)
api_router.include_router(dining.router)
api_router.include_router(flights.router)
