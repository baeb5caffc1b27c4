"""
Events and marketplace analytics.
"""

from typing import Optional

from sqlalchemy import select, delete, or_, func
from sqlalchemy.orm import joinedload

from app.core.actor import Actor
from app.core.logging import get_logger
from app.models.event import Event
from app.models.registration import EventRegistration
from app.models.service_provider import ServiceProvider
from app.schemas.event import EventFilters
from app.storage.base import StorageBase

logger = get_logger(__name__)


class EventStore(StorageBase):

    async def create_event(self, actor: Actor, values: dict) -> Event:
        async with self._transaction("create_event") as session:
            event = Event(**values)
            session.add(event)

        logger.info(
            "event_created",
            event_id=event.id,
            organizer_id=event.organizer_id,
            status=event.status,
            actor_id=actor.user_id,
        )
        return event

    async def get_event(self, event_id: str) -> Optional[Event]:
        """Fetch one event with its organizer attached (None when it has none)."""
        async with self._reader("get_event") as session:
            result = await session.execute(
                select(Event)
                .options(joinedload(Event.organizer))
                .where(Event.id == event_id)
            )
            return result.scalar_one_or_none()

    async def get_events(self, filters: Optional[EventFilters] = None) -> list[Event]:
        """
        Published events matching every supplied filter, latest start first.

        search is a case-insensitive substring match on title or description.
        """
        filters = filters or EventFilters()
        query = select(Event).where(Event.status == "published")

        if filters.category:
            query = query.where(Event.category == filters.category)
        if filters.city:
            query = query.where(Event.city == filters.city)
        if filters.organizer_id:
            query = query.where(Event.organizer_id == filters.organizer_id)
        if filters.search:
            query = query.where(
                or_(
                    Event.title.icontains(filters.search, autoescape=True),
                    Event.description.icontains(filters.search, autoescape=True),
                )
            )

        query = query.order_by(Event.start_date.desc())
        if filters.limit:
            query = query.limit(filters.limit)
        if filters.offset:
            query = query.offset(filters.offset)

        async with self._reader("get_events") as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def list_events_for_organizer(self, organizer_id: str) -> list[Event]:
        """Every event of one organizer regardless of status, for their dashboard."""
        async with self._reader("list_events_for_organizer") as session:
            result = await session.execute(
                select(Event)
                .where(Event.organizer_id == organizer_id)
                .order_by(Event.start_date.desc())
            )
            return list(result.scalars().all())

    async def update_event(self, actor: Actor, event_id: str, changes: dict) -> Optional[Event]:
        async with self._transaction("update_event") as session:
            event = await session.get(Event, event_id)
            if event is None:
                return None
            self._apply(event, changes)

        logger.info("event_updated", event_id=event_id, fields=sorted(changes), actor_id=actor.user_id)
        return event

    async def delete_event(self, actor: Actor, event_id: str) -> None:
        async with self._transaction("delete_event") as session:
            await session.execute(delete(Event).where(Event.id == event_id))
        logger.info("event_deleted", event_id=event_id, actor_id=actor.user_id)

    async def get_event_stats(self) -> dict:
        async with self._reader("get_event_stats") as session:
            total_events = await session.scalar(select(func.count()).select_from(Event))
            total_attendees = await session.scalar(select(func.count()).select_from(EventRegistration))
            total_providers = await session.scalar(select(func.count()).select_from(ServiceProvider))

        return {
            "total_events": total_events or 0,
            "total_attendees": total_attendees or 0,
            "total_providers": total_providers or 0,
        }
