"""
User administration and the signed-in user's own dashboards.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_storage, get_current_user, require_admin
from app.core.actor import Actor
from app.models.user import User
from app.schemas.event import EventResponse, RegistrationResponse
from app.schemas.user import Role, RoleUpdate, UserResponse
from app.schemas.venue import VenueStatsResponse
from app.storage import Storage

router = APIRouter(tags=["Users"])


@router.get("/users", response_model=list[UserResponse])
async def list_users(
    role: Optional[Role] = None,
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=200),
    offset: Optional[int] = Query(None, ge=0),
    actor: Actor = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return await storage.list_users(role=role, search=search, limit=limit, offset=offset)


@router.patch("/users/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: str,
    data: RoleUpdate,
    actor: Actor = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    """Change a user's role. Admin only."""
    user = await storage.update_user_role(actor, user_id, data.role)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    actor: Actor = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    if await storage.get_user(user_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    await storage.delete_user(actor, user_id)


@router.get("/user/events", response_model=list[EventResponse])
async def my_events(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    """Every event of the caller's organizer profile, drafts included."""
    organizer = await storage.get_organizer_by_user_id(user.id)
    if organizer is None:
        return []
    return await storage.list_events_for_organizer(organizer.id)


@router.get("/user/registrations", response_model=list[RegistrationResponse])
async def my_registrations(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return await storage.get_user_registrations(user.id)


@router.get("/user/venues", response_model=list[VenueStatsResponse])
async def my_venues(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    """The caller's venues with this year's event counts."""
    return await storage.get_user_venues_with_stats(user.id)
