"""
Event endpoints with Redis caching on the public listing, plus registrations
and sponsorships nested under an event.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_storage, get_current_user, get_actor, require_roles, authorize_event_owner
from app.core.actor import Actor
from app.core.logging import get_logger
from app.models.user import User
from app.schemas.base import as_utc
from app.schemas.event import (
    EventCreate,
    EventUpdate,
    EventFilters,
    EventResponse,
    EventDetailResponse,
    RegistrationResponse,
)
from app.schemas.sponsor import EventSponsorCreate, EventSponsorUpdate, EventSponsorResponse
from app.services.cache_service import get_cached_events, set_cached_events, invalidate_event_cache
from app.services.organizer_service import ensure_organizer_profile
from app.storage import Storage

logger = get_logger(__name__)
router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=list[EventResponse])
async def list_events_endpoint(
    category: Optional[str] = None,
    city: Optional[str] = None,
    search: Optional[str] = None,
    organizer_id: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=200),
    offset: Optional[int] = Query(None, ge=0),
    storage: Storage = Depends(get_storage),
):
    """
    Published events, latest start first.
    Results are cached in Redis until an event or its sponsors change.
    """
    filters = EventFilters(
        category=category,
        city=city,
        search=search,
        organizer_id=organizer_id,
        limit=limit,
        offset=offset,
    )

    cached = await get_cached_events(filters)
    if cached is not None:
        logger.info("events_list_cache_hit", filters=filters.cache_key())
        return cached

    events = await storage.get_events(filters)
    response_data = [EventResponse.model_validate(e).model_dump(mode="json", by_alias=True) for e in events]
    await set_cached_events(filters, response_data)
    return response_data


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    actor: Actor = Depends(require_roles("organizer")),
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Create an event owned by the caller's organizer profile."""
    if event_data.venue_id and await storage.get_venue(event_data.venue_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venue not found")

    organizer = await ensure_organizer_profile(storage, actor, user)
    event = await storage.create_event(actor, {**event_data.model_dump(), "organizer_id": organizer.id})
    await invalidate_event_cache()
    return event


@router.get("/{event_id}", response_model=EventDetailResponse)
async def get_event_endpoint(event_id: str, storage: Storage = Depends(get_storage)):
    """Get a single event with its organizer. Not cached."""
    event = await storage.get_event(event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event_endpoint(
    event_id: str,
    event_data: EventUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    actor, event = await authorize_event_owner(storage, user, event_id)
    changes = event_data.changes()

    # A partial update can move one end of the range past the stored other end
    start_date = changes.get("start_date") or as_utc(event.start_date)
    end_date = changes.get("end_date") or as_utc(event.end_date)
    if end_date <= start_date:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="endDate must be after startDate")

    if changes.get("venue_id") and await storage.get_venue(changes["venue_id"]) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venue not found")

    updated = await storage.update_event(actor, event_id, changes)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    await invalidate_event_cache()
    return updated


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event_endpoint(
    event_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    actor, _ = await authorize_event_owner(storage, user, event_id)
    await storage.delete_event(actor, event_id)
    await invalidate_event_cache()


# ----------------------------------------------------------------------
# Registrations
# ----------------------------------------------------------------------

@router.post("/{event_id}/register", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_endpoint(
    event_id: str,
    actor: Actor = Depends(get_actor),
    storage: Storage = Depends(get_storage),
):
    """Register the caller for an event and issue a ticket code."""
    return await storage.register_for_event(actor, event_id, actor.user_id)


@router.delete("/{event_id}/register", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_registration_endpoint(
    event_id: str,
    actor: Actor = Depends(get_actor),
    storage: Storage = Depends(get_storage),
):
    await storage.cancel_registration(actor, event_id, actor.user_id)


@router.get("/{event_id}/registrations", response_model=list[RegistrationResponse])
async def event_registrations_endpoint(
    event_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Attendee list for the event owner."""
    await authorize_event_owner(storage, user, event_id)
    return await storage.get_event_registrations(event_id)


# ----------------------------------------------------------------------
# Sponsorships
# ----------------------------------------------------------------------

@router.get("/{event_id}/sponsors", response_model=list[EventSponsorResponse])
async def event_sponsors_endpoint(event_id: str, storage: Storage = Depends(get_storage)):
    return await storage.get_event_sponsors(event_id)


@router.post("/{event_id}/sponsors", response_model=EventSponsorResponse, status_code=status.HTTP_201_CREATED)
async def attach_sponsor_endpoint(
    event_id: str,
    data: EventSponsorCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    actor, _ = await authorize_event_owner(storage, user, event_id)
    link = await storage.attach_sponsor_to_event(actor, event_id, data.sponsor_id, data.tier, data.display_order)
    await invalidate_event_cache()
    return link


@router.patch("/{event_id}/sponsors/{sponsor_id}", response_model=EventSponsorResponse)
async def update_sponsor_tier_endpoint(
    event_id: str,
    sponsor_id: str,
    data: EventSponsorUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    actor, _ = await authorize_event_owner(storage, user, event_id)
    link = await storage.update_event_sponsor_tier(actor, event_id, sponsor_id, data.tier, data.display_order)
    if link is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sponsor is not attached to this event")
    await invalidate_event_cache()
    return link


@router.delete("/{event_id}/sponsors/{sponsor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def detach_sponsor_endpoint(
    event_id: str,
    sponsor_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    actor, _ = await authorize_event_owner(storage, user, event_id)
    await storage.detach_sponsor_from_event(actor, event_id, sponsor_id)
    await invalidate_event_cache()
