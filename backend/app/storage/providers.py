"""
Service provider profiles and the bookings organizers make with them.
"""

from typing import Optional

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError

from app.core.actor import Actor
from app.core.errors import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.service_booking import ServiceBooking
from app.models.event import Event
from app.models.service_provider import ServiceProvider
from app.storage.base import StorageBase

logger = get_logger(__name__)


class ServiceProviderStore(StorageBase):

    async def create_service_provider(self, actor: Actor, values: dict) -> ServiceProvider:
        try:
            async with self._transaction("create_service_provider") as session:
                provider = ServiceProvider(**values)
                session.add(provider)
                await session.flush()
        except IntegrityError as exc:
            raise self._fail(
                ConflictError("Service provider profile already exists for this user"),
                user_id=values.get("user_id"),
            ) from exc

        logger.info("service_provider_created", provider_id=provider.id, user_id=provider.user_id, actor_id=actor.user_id)
        return provider

    async def get_service_provider(self, provider_id: str) -> Optional[ServiceProvider]:
        async with self._reader("get_service_provider") as session:
            return await session.get(ServiceProvider, provider_id)

    async def get_service_provider_by_user_id(self, user_id: str) -> Optional[ServiceProvider]:
        async with self._reader("get_service_provider_by_user_id") as session:
            result = await session.execute(select(ServiceProvider).where(ServiceProvider.user_id == user_id))
            return result.scalar_one_or_none()

    async def get_service_providers(
        self,
        category: Optional[str] = None,
        city: Optional[str] = None,
        verified: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[ServiceProvider]:
        query = select(ServiceProvider)
        if category:
            query = query.where(ServiceProvider.category == category)
        if city:
            query = query.where(ServiceProvider.city == city)
        if verified is not None:
            query = query.where(ServiceProvider.verified == verified)

        query = query.order_by(ServiceProvider.rating.desc(), ServiceProvider.business_name)
        if limit:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)

        async with self._reader("get_service_providers") as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def update_service_provider(self, actor: Actor, provider_id: str, changes: dict) -> Optional[ServiceProvider]:
        async with self._transaction("update_service_provider") as session:
            provider = await session.get(ServiceProvider, provider_id)
            if provider is None:
                return None
            self._apply(provider, changes)

        logger.info("service_provider_updated", provider_id=provider_id, fields=sorted(changes), actor_id=actor.user_id)
        return provider

    async def delete_service_provider(self, actor: Actor, provider_id: str) -> None:
        async with self._transaction("delete_service_provider") as session:
            await session.execute(delete(ServiceProvider).where(ServiceProvider.id == provider_id))
        logger.info("service_provider_deleted", provider_id=provider_id, actor_id=actor.user_id)

    # ------------------------------------------------------------------
    # Service bookings
    # ------------------------------------------------------------------

    async def create_service_booking(self, actor: Actor, values: dict) -> ServiceBooking:
        """Book a provider for an event. organizer_id is always the acting user."""
        async with self._transaction("create_service_booking") as session:
            if await session.get(Event, values["event_id"]) is None:
                raise self._fail(NotFoundError("Event not found"), event_id=values["event_id"])
            if await session.get(ServiceProvider, values["service_provider_id"]) is None:
                raise self._fail(
                    NotFoundError("Service provider not found"),
                    service_provider_id=values["service_provider_id"],
                )

            booking = ServiceBooking(**values, organizer_id=actor.user_id, status="pending")
            session.add(booking)

        logger.info(
            "service_booking_created",
            booking_id=booking.id,
            event_id=booking.event_id,
            provider_id=booking.service_provider_id,
            actor_id=actor.user_id,
        )
        return booking

    async def get_service_booking(self, booking_id: str) -> Optional[ServiceBooking]:
        async with self._reader("get_service_booking") as session:
            return await session.get(ServiceBooking, booking_id)

    async def get_service_bookings(
        self,
        event_id: Optional[str] = None,
        service_provider_id: Optional[str] = None,
        organizer_id: Optional[str] = None,
    ) -> list[ServiceBooking]:
        query = select(ServiceBooking)
        if event_id:
            query = query.where(ServiceBooking.event_id == event_id)
        if service_provider_id:
            query = query.where(ServiceBooking.service_provider_id == service_provider_id)
        if organizer_id:
            query = query.where(ServiceBooking.organizer_id == organizer_id)
        query = query.order_by(ServiceBooking.created_at.desc())

        async with self._reader("get_service_bookings") as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def update_service_booking_status(self, actor: Actor, booking_id: str, status: str) -> Optional[ServiceBooking]:
        async with self._transaction("update_service_booking_status") as session:
            booking = await session.get(ServiceBooking, booking_id)
            if booking is None:
                return None
            previous = booking.status
            self._apply(booking, {"status": status})

        logger.info(
            "service_booking_status_updated",
            booking_id=booking_id,
            previous=previous,
            status=status,
            actor_id=actor.user_id,
        )
        return booking
