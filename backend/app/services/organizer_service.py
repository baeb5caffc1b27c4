"""
Links user accounts to organizer business profiles.

Events reference organizers, not users. An organizer account creating its
first event gets a profile: an existing unclaimed profile with the same email
is claimed, otherwise a new one is built from the account.
"""

from app.core.actor import Actor
from app.core.errors import ConflictError
from app.core.logging import get_logger
from app.models.organizer import Organizer
from app.models.user import User
from app.storage import Storage

logger = get_logger(__name__)


async def ensure_organizer_profile(storage: Storage, actor: Actor, user: User) -> Organizer:
    organizer = await storage.get_organizer_by_user_id(user.id)
    if organizer is not None:
        return organizer

    organizer = await storage.get_organizer_by_email(user.email)
    if organizer is not None and organizer.user_id is None:
        claimed = await storage.update_organizer(actor, organizer.id, {"user_id": user.id})
        logger.info("organizer_profile_claimed", organizer_id=organizer.id, user_id=user.id)
        return claimed
    if organizer is not None:
        raise ConflictError("An organizer profile with this email belongs to another account")

    full_name = " ".join(part for part in (user.first_name, user.last_name) if part)
    organizer = await storage.create_organizer(
        actor,
        {
            "user_id": user.id,
            "email": user.email,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "phone": user.phone,
            "city": user.city,
            "business_name": full_name or user.email,
            "profile_image_url": user.profile_image_url,
        },
    )
    logger.info("organizer_profile_created", organizer_id=organizer.id, user_id=user.id)
    return organizer
