"""
Event registrations (tickets).

Ticket codes are the first 8 hex characters of a UUID4, upper-cased. The
unique constraint on ticket_code is the guarantee; a collision is retried with
a fresh code.
"""

import uuid
from typing import Optional

from sqlalchemy import select, update, exists
from sqlalchemy.exc import IntegrityError

from app.core.actor import Actor
from app.core.errors import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.core.metrics import record_registration, record_ticket_code_retry
from app.db.base import utcnow
from app.models.event import Event
from app.models.registration import EventRegistration
from app.storage.base import StorageBase

logger = get_logger(__name__)

MAX_TICKET_CODE_ATTEMPTS = 3


def generate_ticket_code() -> str:
    return uuid.uuid4().hex[:8].upper()


class RegistrationStore(StorageBase):

    async def register_for_event(self, actor: Actor, event_id: str, attendee_id: str) -> EventRegistration:
        """
        Register an attendee for an event.

        A cancelled registration for the same attendee and event is reactivated
        and keeps its ticket code. Capacity is not enforced here.
        """
        for attempt in range(1, MAX_TICKET_CODE_ATTEMPTS + 1):
            ticket_code = generate_ticket_code()
            try:
                async with self._transaction("register_for_event") as session:
                    if await session.get(Event, event_id) is None:
                        raise self._fail(NotFoundError("Event not found"), event_id=event_id)

                    result = await session.execute(
                        select(EventRegistration)
                        .where(
                            EventRegistration.event_id == event_id,
                            EventRegistration.attendee_id == attendee_id,
                            EventRegistration.status == "cancelled",
                        )
                        .limit(1)
                    )
                    registration = result.scalar_one_or_none()

                    if registration is not None:
                        registration.status = "registered"
                        registration.registered_at = utcnow()
                        outcome = "reactivated"
                    else:
                        registration = EventRegistration(
                            event_id=event_id,
                            attendee_id=attendee_id,
                            status="registered",
                            ticket_code=ticket_code,
                        )
                        session.add(registration)
                        outcome = "registered"
                    await session.flush()
            except IntegrityError:
                if attempt < MAX_TICKET_CODE_ATTEMPTS and await self._ticket_code_taken(ticket_code):
                    record_ticket_code_retry()
                    logger.warning("ticket_code_collision", ticket_code=ticket_code, attempt=attempt)
                    continue
                raise

            record_registration(outcome)
            logger.info(
                "registration_created",
                registration_id=registration.id,
                event_id=event_id,
                attendee_id=attendee_id,
                outcome=outcome,
                actor_id=actor.user_id,
            )
            return registration

        # Unreachable: the final attempt either returns or re-raises
        raise RuntimeError("ticket code generation exhausted")

    async def _ticket_code_taken(self, ticket_code: str) -> bool:
        async with self._reader("ticket_code_taken") as session:
            return bool(
                await session.scalar(select(exists().where(EventRegistration.ticket_code == ticket_code)))
            )

    async def get_registration(self, registration_id: str) -> Optional[EventRegistration]:
        async with self._reader("get_registration") as session:
            return await session.get(EventRegistration, registration_id)

    async def get_event_registrations(self, event_id: str) -> list[EventRegistration]:
        async with self._reader("get_event_registrations") as session:
            result = await session.execute(
                select(EventRegistration)
                .where(EventRegistration.event_id == event_id)
                .order_by(EventRegistration.registered_at)
            )
            return list(result.scalars().all())

    async def get_user_registrations(self, user_id: str) -> list[EventRegistration]:
        async with self._reader("get_user_registrations") as session:
            result = await session.execute(
                select(EventRegistration)
                .where(EventRegistration.attendee_id == user_id)
                .order_by(EventRegistration.registered_at.desc())
            )
            return list(result.scalars().all())

    async def cancel_registration(self, actor: Actor, event_id: str, user_id: str) -> None:
        """Cancel the attendee's active registration. No active registration is not an error."""
        async with self._transaction("cancel_registration") as session:
            result = await session.execute(
                update(EventRegistration)
                .where(
                    EventRegistration.event_id == event_id,
                    EventRegistration.attendee_id == user_id,
                    EventRegistration.status == "registered",
                )
                .values(status="cancelled")
            )

        if result.rowcount:
            record_registration("cancelled")
            logger.info("registration_cancelled", event_id=event_id, attendee_id=user_id, actor_id=actor.user_id)

    async def mark_attended(self, actor: Actor, registration_id: str) -> Optional[EventRegistration]:
        async with self._transaction("mark_attended") as session:
            registration = await session.get(EventRegistration, registration_id)
            if registration is None:
                return None
            if registration.status != "registered":
                raise self._fail(
                    ConflictError(f"Cannot check in a registration that is {registration.status}"),
                    registration_id=registration_id,
                )
            registration.status = "attended"

        record_registration("attended")
        logger.info("registration_attended", registration_id=registration_id, actor_id=actor.user_id)
        return registration
