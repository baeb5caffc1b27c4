"""
Review endpoints for events and service providers.
"""

from fastapi import APIRouter, Depends, status

from app.api.deps import get_storage, get_actor
from app.core.actor import Actor
from app.schemas.review import ReviewCreate, ReviewResponse, TargetType
from app.storage import Storage

router = APIRouter(prefix="/reviews", tags=["Reviews"])


@router.get("/{target_type}/{target_id}", response_model=list[ReviewResponse])
async def list_reviews(target_type: TargetType, target_id: str, storage: Storage = Depends(get_storage)):
    """Reviews of one event or provider, newest first."""
    return await storage.get_reviews(target_type, target_id)


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    data: ReviewCreate,
    actor: Actor = Depends(get_actor),
    storage: Storage = Depends(get_storage),
):
    """
    Review an event or a service provider.
    Provider ratings are refreshed in the same transaction; 404 if the target is unknown.
    """
    return await storage.create_review(actor, data)
