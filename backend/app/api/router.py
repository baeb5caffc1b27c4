"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from app.api.routes import (
    auth,
    users,
    events,
    registrations,
    venues,
    organizers,
    sponsors,
    service_providers,
    service_bookings,
    reviews,
    messages,
    stats,
)

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(events.router)
api_router.include_router(registrations.router)
api_router.include_router(venues.router)
api_router.include_router(organizers.router)
api_router.include_router(sponsors.router)
api_router.include_router(service_providers.router)
api_router.include_router(service_bookings.router)
api_router.include_router(reviews.router)
api_router.include_router(messages.router)
api_router.include_router(stats.router)
