"""
Registration check-in for event owners.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_storage, get_current_user, authorize_event_owner
from app.models.user import User
from app.schemas.event import RegistrationResponse
from app.storage import Storage

router = APIRouter(prefix="/registrations", tags=["Registrations"])


@router.post("/{registration_id}/attend", response_model=RegistrationResponse)
async def mark_attended_endpoint(
    registration_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Check an attendee in. Only active registrations can be checked in."""
    registration = await storage.get_registration(registration_id)
    if registration is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registration not found")

    actor, _ = await authorize_event_owner(storage, user, registration.event_id)
    return await storage.mark_attended(actor, registration_id)
