"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from mototrip.api.routes import (
    me, trips, members, stages, items, expenses,
    fuel_entries, accommodation_entries, service_entries, attachments
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(me.router)
api_router.include_router(trips.router)
api_router.include_router(members.router)
api_router.include_router(stages.router)
api_router.include_router(items.router)
api_router.include_router(expenses.router)
api_router.include_router(fuel_entries.router)
api_router.include_router(accommodation_entries.router)
api_router.include_router(service_entries.router)
api_router.include_router(attachments.router)
