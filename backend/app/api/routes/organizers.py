"""
Organizer profile endpoints. Browsing is public; writes are admin only.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_storage, require_admin
from app.core.actor import Actor
from app.schemas.organizer import OrganizerCreate, OrganizerUpdate, OrganizerResponse
from app.storage import Storage

router = APIRouter(prefix="/organizers", tags=["Organizers"])


@router.get("", response_model=list[OrganizerResponse])
async def list_organizers(
    category: Optional[str] = None,
    city: Optional[str] = None,
    search: Optional[str] = None,
    verified: Optional[bool] = None,
    featured: Optional[bool] = None,
    limit: Optional[int] = Query(None, ge=1, le=200),
    offset: Optional[int] = Query(None, ge=0),
    storage: Storage = Depends(get_storage),
):
    return await storage.get_organizers(
        category=category,
        city=city,
        search=search,
        verified=verified,
        featured=featured,
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=OrganizerResponse, status_code=status.HTTP_201_CREATED)
async def create_organizer(
    data: OrganizerCreate,
    actor: Actor = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return await storage.create_organizer(actor, data.model_dump())


@router.get("/{organizer_id}", response_model=OrganizerResponse)
async def get_organizer(organizer_id: str, storage: Storage = Depends(get_storage)):
    organizer = await storage.get_organizer(organizer_id)
    if organizer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organizer not found")
    return organizer


@router.patch("/{organizer_id}", response_model=OrganizerResponse)
async def update_organizer(
    organizer_id: str,
    data: OrganizerUpdate,
    actor: Actor = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    organizer = await storage.update_organizer(actor, organizer_id, data.changes())
    if organizer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organizer not found")
    return organizer


@router.delete("/{organizer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_organizer(
    organizer_id: str,
    actor: Actor = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    """Delete an organizer. 409 while it still has events."""
    if await storage.get_organizer(organizer_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organizer not found")
    await storage.delete_organizer(actor, organizer_id)
