"""
Venues and the per-owner venue dashboard.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, delete, exists, or_, func, case, and_
from sqlalchemy.orm import joinedload

from app.core.actor import Actor
from app.core.errors import ReferentialBlockError
from app.core.logging import get_logger
from app.db.base import utcnow
from app.models.event import Event
from app.models.venue import Venue
from app.storage.base import StorageBase

logger = get_logger(__name__)


class VenueStore(StorageBase):

    async def create_venue(self, actor: Actor, values: dict) -> Venue:
        async with self._transaction("create_venue") as session:
            venue = Venue(**values)
            session.add(venue)

        logger.info("venue_created", venue_id=venue.id, user_id=venue.user_id, actor_id=actor.user_id)
        return venue

    async def get_venue(self, venue_id: str) -> Optional[Venue]:
        async with self._reader("get_venue") as session:
            result = await session.execute(
                select(Venue)
                .options(joinedload(Venue.owner))
                .where(Venue.id == venue_id)
            )
            return result.scalar_one_or_none()

    async def get_venues(
        self,
        city: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[Venue]:
        query = select(Venue)
        if city:
            query = query.where(Venue.city == city)
        if search:
            query = query.where(
                or_(
                    Venue.name.icontains(search, autoescape=True),
                    Venue.location.icontains(search, autoescape=True),
                )
            )
        query = query.order_by(Venue.name)
        if limit:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)

        async with self._reader("get_venues") as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def update_venue(self, actor: Actor, venue_id: str, changes: dict) -> Optional[Venue]:
        async with self._transaction("update_venue") as session:
            venue = await session.get(Venue, venue_id)
            if venue is None:
                return None
            self._apply(venue, changes)

        logger.info("venue_updated", venue_id=venue_id, fields=sorted(changes), actor_id=actor.user_id)
        return venue

    async def delete_venue(self, actor: Actor, venue_id: str) -> None:
        """Delete a venue. Refused while any event still points at it."""
        async with self._transaction("delete_venue") as session:
            in_use = await session.scalar(select(exists().where(Event.venue_id == venue_id)))
            if in_use:
                raise self._fail(
                    ReferentialBlockError("Cannot delete venue: it is currently used by one or more events"),
                    venue_id=venue_id,
                )
            await session.execute(delete(Venue).where(Venue.id == venue_id))

        logger.info("venue_deleted", venue_id=venue_id, actor_id=actor.user_id)

    async def get_user_venues_with_stats(self, user_id: str) -> list[dict]:
        """The user's venues, each with the number of events starting this calendar year."""
        now = utcnow()
        year_start = datetime(now.year, 1, 1, tzinfo=timezone.utc)
        next_year_start = datetime(now.year + 1, 1, 1, tzinfo=timezone.utc)

        this_year = and_(Event.start_date >= year_start, Event.start_date < next_year_start)
        event_count = func.count(case((this_year, Event.id))).label("event_count")

        query = (
            select(Venue.id, Venue.name, Venue.name_ar, Venue.city, Venue.location, event_count)
            .outerjoin(Event, Event.venue_id == Venue.id)
            .where(Venue.user_id == user_id)
            .group_by(Venue.id, Venue.name, Venue.name_ar, Venue.city, Venue.location)
            .order_by(Venue.name)
        )

        async with self._reader("get_user_venues_with_stats") as session:
            result = await session.execute(query)
            return [dict(row._mapping) for row in result.all()]
