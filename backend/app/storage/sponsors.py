"""
Sponsors and event sponsorships.

event_sponsors is the source of truth. Every write to it re-projects the first
three sponsors (display_order, then newest) onto events.sponsor1_id..sponsor3_id
inside the same transaction, so the slots never disagree with the join table.
"""

from typing import Optional

from sqlalchemy import select, update, delete, exists, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.core.actor import Actor
from app.core.errors import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.db.base import utcnow
from app.models.event import Event, SPONSOR_SLOTS
from app.models.sponsor import Sponsor, EventSponsor
from app.storage.base import StorageBase

logger = get_logger(__name__)


class SponsorStore(StorageBase):

    async def create_sponsor(self, actor: Actor, values: dict) -> Sponsor:
        async with self._transaction("create_sponsor") as session:
            sponsor = Sponsor(**values)
            session.add(sponsor)

        logger.info("sponsor_created", sponsor_id=sponsor.id, user_id=sponsor.user_id, actor_id=actor.user_id)
        return sponsor

    async def get_sponsor(self, sponsor_id: str) -> Optional[Sponsor]:
        async with self._reader("get_sponsor") as session:
            return await session.get(Sponsor, sponsor_id)

    async def get_sponsor_by_user_id(self, user_id: str) -> Optional[Sponsor]:
        async with self._reader("get_sponsor_by_user_id") as session:
            result = await session.execute(
                select(Sponsor).where(Sponsor.user_id == user_id).order_by(Sponsor.created_at).limit(1)
            )
            return result.scalar_one_or_none()

    async def get_sponsors(
        self,
        city: Optional[str] = None,
        search: Optional[str] = None,
        is_featured: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[Sponsor]:
        query = select(Sponsor)
        if city:
            query = query.where(Sponsor.city == city)
        if is_featured is not None:
            query = query.where(Sponsor.is_featured == is_featured)
        if search:
            query = query.where(
                or_(
                    Sponsor.name.icontains(search, autoescape=True),
                    Sponsor.name_ar.icontains(search, autoescape=True),
                    Sponsor.description.icontains(search, autoescape=True),
                )
            )

        query = query.order_by(Sponsor.is_featured.desc(), Sponsor.created_at.desc())
        if limit:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)

        async with self._reader("get_sponsors") as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def update_sponsor(self, actor: Actor, sponsor_id: str, changes: dict) -> Optional[Sponsor]:
        async with self._transaction("update_sponsor") as session:
            sponsor = await session.get(Sponsor, sponsor_id)
            if sponsor is None:
                return None
            self._apply(sponsor, changes)

        logger.info("sponsor_updated", sponsor_id=sponsor_id, fields=sorted(changes), actor_id=actor.user_id)
        return sponsor

    async def delete_sponsor(self, actor: Actor, sponsor_id: str) -> None:
        async with self._transaction("delete_sponsor") as session:
            result = await session.execute(
                select(EventSponsor.event_id).where(EventSponsor.sponsor_id == sponsor_id)
            )
            event_ids = list(result.scalars().all())

            await session.execute(delete(EventSponsor).where(EventSponsor.sponsor_id == sponsor_id))
            await session.execute(delete(Sponsor).where(Sponsor.id == sponsor_id))
            # The next sponsor in line moves up into the freed slot
            for event_id in event_ids:
                await self._sync_sponsor_slots(session, event_id)

        logger.info("sponsor_deleted", sponsor_id=sponsor_id, events=len(event_ids), actor_id=actor.user_id)

    # ------------------------------------------------------------------
    # Event sponsorships
    # ------------------------------------------------------------------

    async def get_event_sponsors(self, event_id: str) -> list[EventSponsor]:
        async with self._reader("get_event_sponsors") as session:
            result = await session.execute(
                select(EventSponsor)
                .options(joinedload(EventSponsor.sponsor))
                .where(EventSponsor.event_id == event_id)
                .order_by(EventSponsor.display_order, EventSponsor.created_at.desc())
            )
            return list(result.scalars().all())

    async def attach_sponsor_to_event(
        self,
        actor: Actor,
        event_id: str,
        sponsor_id: str,
        tier: str = "partner",
        display_order: int = 0,
    ) -> EventSponsor:
        async with self._transaction("attach_sponsor_to_event") as session:
            if await session.get(Event, event_id) is None:
                raise self._fail(NotFoundError("Event not found"), event_id=event_id)
            if await session.get(Sponsor, sponsor_id) is None:
                raise self._fail(NotFoundError("Sponsor not found"), sponsor_id=sponsor_id)

            already_attached = await session.scalar(
                select(exists().where(EventSponsor.event_id == event_id, EventSponsor.sponsor_id == sponsor_id))
            )
            if already_attached:
                raise self._fail(
                    ConflictError("Sponsor is already attached to this event"),
                    event_id=event_id,
                    sponsor_id=sponsor_id,
                )

            link = EventSponsor(event_id=event_id, sponsor_id=sponsor_id, tier=tier, display_order=display_order)
            session.add(link)
            await session.flush()
            await self._sync_sponsor_slots(session, event_id)
            await session.refresh(link, ["sponsor"])

        logger.info("sponsor_attached", event_id=event_id, sponsor_id=sponsor_id, tier=tier, actor_id=actor.user_id)
        return link

    async def detach_sponsor_from_event(self, actor: Actor, event_id: str, sponsor_id: str) -> None:
        async with self._transaction("detach_sponsor_from_event") as session:
            await session.execute(
                delete(EventSponsor).where(EventSponsor.event_id == event_id, EventSponsor.sponsor_id == sponsor_id)
            )
            await self._sync_sponsor_slots(session, event_id)

        logger.info("sponsor_detached", event_id=event_id, sponsor_id=sponsor_id, actor_id=actor.user_id)

    async def update_event_sponsor_tier(
        self,
        actor: Actor,
        event_id: str,
        sponsor_id: str,
        tier: str,
        display_order: Optional[int] = None,
    ) -> Optional[EventSponsor]:
        async with self._transaction("update_event_sponsor_tier") as session:
            result = await session.execute(
                select(EventSponsor).where(EventSponsor.event_id == event_id, EventSponsor.sponsor_id == sponsor_id)
            )
            link = result.scalar_one_or_none()
            if link is None:
                return None

            link.tier = tier
            if display_order is not None:
                link.display_order = display_order
            await session.flush()
            await self._sync_sponsor_slots(session, event_id)
            await session.refresh(link, ["sponsor"])

        logger.info("sponsor_tier_updated", event_id=event_id, sponsor_id=sponsor_id, tier=tier, actor_id=actor.user_id)
        return link

    async def _sync_sponsor_slots(self, session: AsyncSession, event_id: str) -> None:
        result = await session.execute(
            select(EventSponsor.sponsor_id)
            .where(EventSponsor.event_id == event_id)
            .order_by(EventSponsor.display_order, EventSponsor.created_at.desc())
            .limit(len(SPONSOR_SLOTS))
        )
        sponsor_ids = list(result.scalars().all())
        sponsor_ids += [None] * (len(SPONSOR_SLOTS) - len(sponsor_ids))

        await session.execute(
            update(Event)
            .where(Event.id == event_id)
            .values(**dict(zip(SPONSOR_SLOTS, sponsor_ids)), updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
