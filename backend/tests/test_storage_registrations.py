"""
Tests for registrations: ticket codes, cancellation, reactivation and check-in.
"""

import re

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.errors import ConflictError, NotFoundError
from app.storage import registrations as registration_store
from conftest import actor_for

TICKET_CODE = re.compile(r"^[0-9A-F]{8}$")


@pytest.mark.asyncio
async def test_register_issues_uppercase_ticket_code(storage, make_event, attendee):
    event = await make_event()

    registration = await storage.register_for_event(actor_for(attendee), event.id, attendee.id)

    assert registration.status == "registered"
    assert registration.event_id == event.id
    assert registration.attendee_id == attendee.id
    assert TICKET_CODE.match(registration.ticket_code)


def test_generated_ticket_codes_are_well_formed_and_rarely_collide():
    codes = [registration_store.generate_ticket_code() for _ in range(10_000)]

    assert all(TICKET_CODE.match(code) for code in codes)
    # 32 bits of randomness: a stray birthday collision is possible here and is
    # absorbed by the unique constraint plus retry on insert
    assert len(codes) - len(set(codes)) <= 2


@pytest.mark.asyncio
async def test_register_for_unknown_event(storage, attendee):
    with pytest.raises(NotFoundError):
        await storage.register_for_event(actor_for(attendee), "missing", attendee.id)


@pytest.mark.asyncio
async def test_ticket_codes_are_unique_across_registrations(storage, make_event, make_user):
    event = await make_event()
    codes = []
    for _ in range(25):
        user = await make_user()
        registration = await storage.register_for_event(actor_for(user), event.id, user.id)
        codes.append(registration.ticket_code)

    assert len(set(codes)) == len(codes)


@pytest.mark.asyncio
async def test_ticket_code_collision_is_retried(storage, make_event, make_user, monkeypatch):
    """A colliding code is replaced with a fresh one."""
    event = await make_event()
    first_user = await make_user()
    second_user = await make_user()

    codes = iter(["AAAAAAAA", "AAAAAAAA", "BBBBBBBB"])
    monkeypatch.setattr(registration_store, "generate_ticket_code", lambda: next(codes))

    first = await storage.register_for_event(actor_for(first_user), event.id, first_user.id)
    second = await storage.register_for_event(actor_for(second_user), event.id, second_user.id)

    assert first.ticket_code == "AAAAAAAA"
    assert second.ticket_code == "BBBBBBBB"
    assert len(await storage.get_event_registrations(event.id)) == 2


@pytest.mark.asyncio
async def test_ticket_code_collision_gives_up_after_max_attempts(storage, make_event, make_user, monkeypatch):
    event = await make_event()
    first_user = await make_user()
    second_user = await make_user()
    monkeypatch.setattr(registration_store, "generate_ticket_code", lambda: "CCCCCCCC")

    await storage.register_for_event(actor_for(first_user), event.id, first_user.id)

    with pytest.raises(IntegrityError):
        await storage.register_for_event(actor_for(second_user), event.id, second_user.id)


@pytest.mark.asyncio
async def test_cancel_then_register_reactivates_same_row(storage, make_event, attendee):
    """Re-registering after a cancellation reuses the cancelled ticket."""
    event = await make_event()
    original = await storage.register_for_event(actor_for(attendee), event.id, attendee.id)

    await storage.cancel_registration(actor_for(attendee), event.id, attendee.id)
    cancelled = await storage.get_registration(original.id)
    assert cancelled.status == "cancelled"

    again = await storage.register_for_event(actor_for(attendee), event.id, attendee.id)
    assert again.id == original.id
    assert again.ticket_code == original.ticket_code
    assert again.status == "registered"
    assert len(await storage.get_user_registrations(attendee.id)) == 1


@pytest.mark.asyncio
async def test_active_registrations_are_not_deduplicated(storage, make_event, attendee):
    event = await make_event()

    first = await storage.register_for_event(actor_for(attendee), event.id, attendee.id)
    second = await storage.register_for_event(actor_for(attendee), event.id, attendee.id)

    assert first.id != second.id
    assert len(await storage.get_event_registrations(event.id)) == 2


@pytest.mark.asyncio
async def test_cancel_without_registration_is_silent(storage, make_event, attendee):
    event = await make_event()
    await storage.cancel_registration(actor_for(attendee), event.id, attendee.id)
    assert await storage.get_user_registrations(attendee.id) == []


@pytest.mark.asyncio
async def test_capacity_is_not_enforced(storage, make_event, make_user):
    event = await make_event(max_attendees=1)
    for _ in range(2):
        user = await make_user()
        await storage.register_for_event(actor_for(user), event.id, user.id)

    assert len(await storage.get_event_registrations(event.id)) == 2


@pytest.mark.asyncio
async def test_mark_attended_only_from_registered(storage, make_event, organizer_user, attendee):
    event = await make_event()
    registration = await storage.register_for_event(actor_for(attendee), event.id, attendee.id)

    attended = await storage.mark_attended(actor_for(organizer_user), registration.id)
    assert attended.status == "attended"

    with pytest.raises(ConflictError):
        await storage.mark_attended(actor_for(organizer_user), registration.id)

    assert await storage.mark_attended(actor_for(organizer_user), "missing") is None


@pytest.mark.asyncio
async def test_attended_registration_is_not_cancelled(storage, make_event, organizer_user, attendee):
    event = await make_event()
    registration = await storage.register_for_event(actor_for(attendee), event.id, attendee.id)
    await storage.mark_attended(actor_for(organizer_user), registration.id)

    await storage.cancel_registration(actor_for(attendee), event.id, attendee.id)
    assert (await storage.get_registration(registration.id)).status == "attended"
