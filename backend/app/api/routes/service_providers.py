"""
Service provider endpoints. One profile per service_provider account.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_storage, get_current_user, require_roles, authorize_owner
from app.core.actor import Actor
from app.models.user import User
from app.schemas.service_provider import ServiceProviderCreate, ServiceProviderUpdate, ServiceProviderResponse
from app.storage import Storage

router = APIRouter(prefix="/service-providers", tags=["Service Providers"])


async def _owned_provider(storage: Storage, user: User, provider_id: str) -> Actor:
    provider = await storage.get_service_provider(provider_id)
    if provider is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service provider not found")
    return authorize_owner(user, provider.user_id)


@router.get("", response_model=list[ServiceProviderResponse])
async def list_service_providers(
    category: Optional[str] = None,
    city: Optional[str] = None,
    verified: Optional[bool] = None,
    limit: Optional[int] = Query(None, ge=1, le=200),
    offset: Optional[int] = Query(None, ge=0),
    storage: Storage = Depends(get_storage),
):
    """Browse providers, highest rated first."""
    return await storage.get_service_providers(
        category=category, city=city, verified=verified, limit=limit, offset=offset
    )


@router.post("", response_model=ServiceProviderResponse, status_code=status.HTTP_201_CREATED)
async def create_service_provider(
    data: ServiceProviderCreate,
    actor: Actor = Depends(require_roles("service_provider")),
    storage: Storage = Depends(get_storage),
):
    """Create the caller's provider profile. 409 if one already exists."""
    return await storage.create_service_provider(actor, {**data.model_dump(), "user_id": actor.user_id})


@router.get("/{provider_id}", response_model=ServiceProviderResponse)
async def get_service_provider(provider_id: str, storage: Storage = Depends(get_storage)):
    provider = await storage.get_service_provider(provider_id)
    if provider is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service provider not found")
    return provider


@router.patch("/{provider_id}", response_model=ServiceProviderResponse)
async def update_service_provider(
    provider_id: str,
    data: ServiceProviderUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    actor = await _owned_provider(storage, user, provider_id)
    changes = data.changes()
    if not actor.is_admin:
        changes.pop("verified", None)
    provider = await storage.update_service_provider(actor, provider_id, changes)
    if provider is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service provider not found")
    return provider


@router.delete("/{provider_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service_provider(
    provider_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    actor = await _owned_provider(storage, user, provider_id)
    await storage.delete_service_provider(actor, provider_id)
