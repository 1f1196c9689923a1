"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from training_ledger.api.routes import admins, trainers, participants, bookings

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(admins.router)
api_router.include_router(trainers.router)
api_router.include_router(participants.router)
api_router.include_router(bookings.router)
