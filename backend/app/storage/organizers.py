"""
Organizer business profiles.
"""

from typing import Optional

from sqlalchemy import select, delete, exists, or_
from sqlalchemy.exc import IntegrityError

from app.core.actor import Actor
from app.core.errors import ConflictError, ReferentialBlockError
from app.core.logging import get_logger
from app.models.event import Event
from app.models.organizer import Organizer
from app.storage.base import StorageBase

logger = get_logger(__name__)


class OrganizerStore(StorageBase):

    async def create_organizer(self, actor: Actor, values: dict) -> Organizer:
        values = {key: value for key, value in values.items() if value is not None}
        try:
            async with self._transaction("create_organizer") as session:
                organizer = Organizer(**values)
                session.add(organizer)
                await session.flush()
        except IntegrityError as exc:
            raise self._fail(
                ConflictError("Organizer with this email already exists"),
                email=values.get("email"),
            ) from exc

        logger.info("organizer_created", organizer_id=organizer.id, user_id=organizer.user_id, actor_id=actor.user_id)
        return organizer

    async def get_organizer(self, organizer_id: str) -> Optional[Organizer]:
        async with self._reader("get_organizer") as session:
            return await session.get(Organizer, organizer_id)

    async def get_organizer_by_email(self, email: str) -> Optional[Organizer]:
        async with self._reader("get_organizer_by_email") as session:
            result = await session.execute(select(Organizer).where(Organizer.email == email))
            return result.scalar_one_or_none()

    async def get_organizer_by_user_id(self, user_id: str) -> Optional[Organizer]:
        async with self._reader("get_organizer_by_user_id") as session:
            result = await session.execute(select(Organizer).where(Organizer.user_id == user_id))
            return result.scalar_one_or_none()

    async def get_organizers(
        self,
        category: Optional[str] = None,
        city: Optional[str] = None,
        search: Optional[str] = None,
        verified: Optional[bool] = None,
        featured: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[Organizer]:
        """Browse organizers, featured then verified first, then by business name."""
        query = select(Organizer)
        if category:
            query = query.where(Organizer.category == category)
        if city:
            query = query.where(Organizer.city == city)
        if verified is not None:
            query = query.where(Organizer.verified == verified)
        if featured is not None:
            query = query.where(Organizer.featured == featured)
        if search:
            query = query.where(
                or_(
                    Organizer.first_name.icontains(search, autoescape=True),
                    Organizer.last_name.icontains(search, autoescape=True),
                    Organizer.business_name.icontains(search, autoescape=True),
                    Organizer.email.icontains(search, autoescape=True),
                )
            )

        query = query.order_by(Organizer.featured.desc(), Organizer.verified.desc(), Organizer.business_name)
        if limit:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)

        async with self._reader("get_organizers") as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def update_organizer(self, actor: Actor, organizer_id: str, changes: dict) -> Optional[Organizer]:
        try:
            async with self._transaction("update_organizer") as session:
                organizer = await session.get(Organizer, organizer_id)
                if organizer is None:
                    return None
                self._apply(organizer, changes)
                await session.flush()
        except IntegrityError as exc:
            raise self._fail(
                ConflictError("Organizer with this email already exists"),
                organizer_id=organizer_id,
            ) from exc

        logger.info("organizer_updated", organizer_id=organizer_id, fields=sorted(changes), actor_id=actor.user_id)
        return organizer

    async def delete_organizer(self, actor: Actor, organizer_id: str) -> None:
        """Delete an organizer. Refused while it still owns events."""
        async with self._transaction("delete_organizer") as session:
            has_events = await session.scalar(select(exists().where(Event.organizer_id == organizer_id)))
            if has_events:
                raise self._fail(
                    ReferentialBlockError("Cannot delete organizer: they have organized events"),
                    organizer_id=organizer_id,
                )
            await session.execute(delete(Organizer).where(Organizer.id == organizer_id))

        logger.info("organizer_deleted", organizer_id=organizer_id, actor_id=actor.user_id)
