"""
Venue endpoints. Venue accounts manage their own venues; admins manage all.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_storage, get_current_user, require_roles, authorize_owner
from app.core.actor import Actor
from app.models.user import User
from app.schemas.venue import VenueCreate, VenueUpdate, VenueResponse, VenueDetailResponse
from app.storage import Storage

router = APIRouter(prefix="/venues", tags=["Venues"])


async def _owned_venue(storage: Storage, user: User, venue_id: str) -> Actor:
    venue = await storage.get_venue(venue_id)
    if venue is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venue not found")
    return authorize_owner(user, venue.user_id)


@router.get("", response_model=list[VenueResponse])
async def list_venues(
    city: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=200),
    offset: Optional[int] = Query(None, ge=0),
    storage: Storage = Depends(get_storage),
):
    return await storage.get_venues(city=city, search=search, limit=limit, offset=offset)


@router.post("", response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
async def create_venue(
    data: VenueCreate,
    actor: Actor = Depends(require_roles("venue")),
    storage: Storage = Depends(get_storage),
):
    values = data.model_dump()
    # Only admins may list a venue as verified
    if not actor.is_admin:
        values["verified"] = False
    return await storage.create_venue(actor, {**values, "user_id": actor.user_id})


@router.get("/{venue_id}", response_model=VenueDetailResponse)
async def get_venue(venue_id: str, storage: Storage = Depends(get_storage)):
    venue = await storage.get_venue(venue_id)
    if venue is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venue not found")
    return venue


@router.patch("/{venue_id}", response_model=VenueResponse)
async def update_venue(
    venue_id: str,
    data: VenueUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    actor = await _owned_venue(storage, user, venue_id)
    changes = data.changes()
    if not actor.is_admin:
        changes.pop("verified", None)
    venue = await storage.update_venue(actor, venue_id, changes)
    if venue is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venue not found")
    return venue


@router.delete("/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_venue(
    venue_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Delete a venue. 409 while events still use it."""
    actor = await _owned_venue(storage, user, venue_id)
    await storage.delete_venue(actor, venue_id)
