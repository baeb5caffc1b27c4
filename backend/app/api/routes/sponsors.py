"""
Sponsor endpoints. Sponsor accounts manage their own profiles.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_storage, get_current_user, require_roles, authorize_owner
from app.core.actor import Actor
from app.models.user import User
from app.schemas.sponsor import SponsorCreate, SponsorUpdate, SponsorResponse
from app.services.cache_service import invalidate_event_cache
from app.storage import Storage

router = APIRouter(prefix="/sponsors", tags=["Sponsors"])


async def _owned_sponsor(storage: Storage, user: User, sponsor_id: str) -> Actor:
    sponsor = await storage.get_sponsor(sponsor_id)
    if sponsor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sponsor not found")
    return authorize_owner(user, sponsor.user_id)


@router.get("", response_model=list[SponsorResponse])
async def list_sponsors(
    city: Optional[str] = None,
    search: Optional[str] = None,
    is_featured: Optional[bool] = None,
    limit: Optional[int] = Query(None, ge=1, le=200),
    offset: Optional[int] = Query(None, ge=0),
    storage: Storage = Depends(get_storage),
):
    return await storage.get_sponsors(city=city, search=search, is_featured=is_featured, limit=limit, offset=offset)


@router.post("", response_model=SponsorResponse, status_code=status.HTTP_201_CREATED)
async def create_sponsor(
    data: SponsorCreate,
    actor: Actor = Depends(require_roles("sponsor")),
    storage: Storage = Depends(get_storage),
):
    return await storage.create_sponsor(actor, {**data.model_dump(), "user_id": actor.user_id})


@router.get("/{sponsor_id}", response_model=SponsorResponse)
async def get_sponsor(sponsor_id: str, storage: Storage = Depends(get_storage)):
    sponsor = await storage.get_sponsor(sponsor_id)
    if sponsor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sponsor not found")
    return sponsor


@router.patch("/{sponsor_id}", response_model=SponsorResponse)
async def update_sponsor(
    sponsor_id: str,
    data: SponsorUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    actor = await _owned_sponsor(storage, user, sponsor_id)
    sponsor = await storage.update_sponsor(actor, sponsor_id, data.changes())
    if sponsor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sponsor not found")
    return sponsor


@router.delete("/{sponsor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sponsor(
    sponsor_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    actor = await _owned_sponsor(storage, user, sponsor_id)
    await storage.delete_sponsor(actor, sponsor_id)
    # Sponsor slots of the affected events were re-projected
    await invalidate_event_cache()
