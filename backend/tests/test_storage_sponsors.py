"""
Tests for sponsorships: the event_sponsors join table drives the three sponsor
slots on the event.
"""

import pytest

from app.core.errors import ConflictError, NotFoundError
from conftest import actor_for


def _slots(event):
    return [event.sponsor1_id, event.sponsor2_id, event.sponsor3_id]


async def _sponsors(storage, owner, count):
    return [
        await storage.create_sponsor(actor_for(owner), {"user_id": owner.id, "name": f"Sponsor {i}"})
        for i in range(count)
    ]


@pytest.mark.asyncio
async def test_attach_projects_first_three_by_display_order(storage, make_user, make_event, organizer_user):
    event = await make_event()
    sponsors = await _sponsors(storage, await make_user(role="sponsor"), 4)
    actor = actor_for(organizer_user)

    for order, sponsor in zip((3, 1, 4, 2), sponsors):
        link = await storage.attach_sponsor_to_event(actor, event.id, sponsor.id, "gold", order)
        assert link.sponsor.id == sponsor.id

    refreshed = await storage.get_event(event.id)
    assert _slots(refreshed) == [sponsors[1].id, sponsors[3].id, sponsors[0].id]

    listed = await storage.get_event_sponsors(event.id)
    assert [link.display_order for link in listed] == [1, 2, 3, 4]
    assert listed[0].sponsor.name == "Sponsor 1"


@pytest.mark.asyncio
async def test_detach_moves_next_sponsor_into_slot(storage, make_user, make_event, organizer_user):
    event = await make_event()
    sponsors = await _sponsors(storage, await make_user(role="sponsor"), 4)
    actor = actor_for(organizer_user)
    for order, sponsor in enumerate(sponsors):
        await storage.attach_sponsor_to_event(actor, event.id, sponsor.id, "silver", order)

    await storage.detach_sponsor_from_event(actor, event.id, sponsors[0].id)

    refreshed = await storage.get_event(event.id)
    assert _slots(refreshed) == [sponsors[1].id, sponsors[2].id, sponsors[3].id]


@pytest.mark.asyncio
async def test_slots_are_cleared_when_sponsors_detached(storage, make_user, make_event, organizer_user):
    event = await make_event()
    (sponsor,) = await _sponsors(storage, await make_user(role="sponsor"), 1)
    actor = actor_for(organizer_user)

    await storage.attach_sponsor_to_event(actor, event.id, sponsor.id)
    assert _slots(await storage.get_event(event.id)) == [sponsor.id, None, None]

    await storage.detach_sponsor_from_event(actor, event.id, sponsor.id)
    assert _slots(await storage.get_event(event.id)) == [None, None, None]


@pytest.mark.asyncio
async def test_tier_update_can_reorder_slots(storage, make_user, make_event, organizer_user):
    event = await make_event()
    first, second = await _sponsors(storage, await make_user(role="sponsor"), 2)
    actor = actor_for(organizer_user)
    await storage.attach_sponsor_to_event(actor, event.id, first.id, "bronze", 0)
    await storage.attach_sponsor_to_event(actor, event.id, second.id, "bronze", 1)

    link = await storage.update_event_sponsor_tier(actor, event.id, second.id, "platinum", display_order=0)
    await storage.update_event_sponsor_tier(actor, event.id, first.id, "bronze", display_order=5)

    assert link.tier == "platinum"
    assert _slots(await storage.get_event(event.id)) == [second.id, first.id, None]
    assert await storage.update_event_sponsor_tier(actor, event.id, "missing", "gold") is None


@pytest.mark.asyncio
async def test_duplicate_attach_conflicts(storage, make_user, make_event, organizer_user):
    event = await make_event()
    (sponsor,) = await _sponsors(storage, await make_user(role="sponsor"), 1)
    actor = actor_for(organizer_user)
    await storage.attach_sponsor_to_event(actor, event.id, sponsor.id)

    with pytest.raises(ConflictError):
        await storage.attach_sponsor_to_event(actor, event.id, sponsor.id)


@pytest.mark.asyncio
async def test_attach_unknown_sponsor_or_event(storage, make_user, make_event, organizer_user):
    event = await make_event()
    (sponsor,) = await _sponsors(storage, await make_user(role="sponsor"), 1)
    actor = actor_for(organizer_user)

    with pytest.raises(NotFoundError):
        await storage.attach_sponsor_to_event(actor, event.id, "missing")
    with pytest.raises(NotFoundError):
        await storage.attach_sponsor_to_event(actor, "missing", sponsor.id)


@pytest.mark.asyncio
async def test_deleting_sponsor_resyncs_slots(storage, make_user, make_event, organizer_user):
    event = await make_event()
    owner = await make_user(role="sponsor")
    first, second = await _sponsors(storage, owner, 2)
    actor = actor_for(organizer_user)
    await storage.attach_sponsor_to_event(actor, event.id, first.id, "gold", 0)
    await storage.attach_sponsor_to_event(actor, event.id, second.id, "gold", 1)

    await storage.delete_sponsor(actor_for(owner), first.id)

    assert _slots(await storage.get_event(event.id)) == [second.id, None, None]
    assert await storage.get_sponsor(first.id) is None


@pytest.mark.asyncio
async def test_get_sponsors_featured_first(storage, make_user):
    owner = await make_user(role="sponsor")
    actor = actor_for(owner)
    await storage.create_sponsor(actor, {"name": "Regular"})
    await storage.create_sponsor(actor, {"name": "Star", "is_featured": True})

    assert [s.name for s in await storage.get_sponsors()] == ["Star", "Regular"]
    assert [s.name for s in await storage.get_sponsors(search="reg")] == ["Regular"]
