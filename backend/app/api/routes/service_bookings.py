"""
Service booking endpoints: organizers hire providers for their events.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_storage, get_current_user, authorize_event_owner, authorize_owner
from app.models.user import User
from app.schemas.service_provider import ServiceBookingCreate, BookingStatusUpdate, ServiceBookingResponse
from app.storage import Storage

router = APIRouter(prefix="/service-bookings", tags=["Service Bookings"])


@router.get("", response_model=list[ServiceBookingResponse])
async def list_service_bookings(
    event_id: Optional[str] = None,
    service_provider_id: Optional[str] = None,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Bookings visible to the caller: admins see everything, providers see the
    bookings made with them, everyone else sees the bookings they made.
    """
    if user.role == "admin":
        return await storage.get_service_bookings(event_id=event_id, service_provider_id=service_provider_id)

    if user.role == "service_provider":
        provider = await storage.get_service_provider_by_user_id(user.id)
        if provider is None:
            return []
        return await storage.get_service_bookings(event_id=event_id, service_provider_id=provider.id)

    return await storage.get_service_bookings(
        event_id=event_id, service_provider_id=service_provider_id, organizer_id=user.id
    )


@router.post("", response_model=ServiceBookingResponse, status_code=status.HTTP_201_CREATED)
async def create_service_booking(
    data: ServiceBookingCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Book a provider for one of the caller's events."""
    actor, _ = await authorize_event_owner(storage, user, data.event_id)
    return await storage.create_service_booking(actor, data.model_dump())


@router.patch("/{booking_id}/status", response_model=ServiceBookingResponse)
async def update_service_booking_status(
    booking_id: str,
    data: BookingStatusUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Either side of the booking (or an admin) may change its status."""
    booking = await storage.get_service_booking(booking_id)
    if booking is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service booking not found")

    provider = await storage.get_service_provider(booking.service_provider_id)
    if provider is not None and provider.user_id == user.id:
        actor = authorize_owner(user, provider.user_id)
    else:
        actor = authorize_owner(user, booking.organizer_id)

    return await storage.update_service_booking_status(actor, booking_id, data.status)
