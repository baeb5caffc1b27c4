"""
Tests for event storage: public listing filters, lookups, updates and stats.
"""

from datetime import datetime, timezone, timedelta

import pytest

from app.schemas.event import EventFilters
from conftest import actor_for


def _days_from_now(days: int) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


@pytest.mark.asyncio
async def test_get_events_returns_only_published_latest_first(storage, make_event):
    """Drafts are hidden and the latest start date comes first."""
    early = await make_event(title="Early", start_date=_days_from_now(5), end_date=_days_from_now(6))
    late = await make_event(title="Late", start_date=_days_from_now(50), end_date=_days_from_now(51))
    await make_event(title="Draft", status="draft")

    events = await storage.get_events()
    assert [e.id for e in events] == [late.id, early.id]


@pytest.mark.asyncio
async def test_get_events_filters_are_conjunctive(storage, make_event):
    """category, city and search must all match."""
    match = await make_event(title="Jazz Night", category="music", city="Jeddah")
    await make_event(title="Jazz Brunch", category="food", city="Jeddah")
    await make_event(title="Rock Night", category="music", city="Riyadh")

    events = await storage.get_events(EventFilters(category="music", city="Jeddah", search="jazz"))
    assert [e.id for e in events] == [match.id]


@pytest.mark.asyncio
async def test_get_events_search_matches_title_or_description_case_insensitively(storage, make_event):
    by_title = await make_event(title="AI Workshop", description="Hands on")
    by_description = await make_event(title="Meetup", description="Talks about ai safety")
    await make_event(title="Pottery", description="Clay and wheels")

    events = await storage.get_events(EventFilters(search="AI"))
    assert {e.id for e in events} == {by_title.id, by_description.id}


@pytest.mark.asyncio
async def test_get_events_search_treats_wildcards_literally(storage, make_event):
    discounted = await make_event(title="Sale 100% off")
    await make_event(title="Sale 1000 tickets")

    events = await storage.get_events(EventFilters(search="100%"))
    assert [e.id for e in events] == [discounted.id]


@pytest.mark.asyncio
async def test_get_events_by_organizer_and_pagination(storage, make_event, organizer):
    for day in range(1, 6):
        await make_event(title=f"Day {day}", start_date=_days_from_now(day), end_date=_days_from_now(day + 1))

    page = await storage.get_events(EventFilters(organizer_id=organizer.id, limit=2, offset=1))
    assert [e.title for e in page] == ["Day 4", "Day 3"]

    assert await storage.get_events(EventFilters(organizer_id="nobody")) == []


@pytest.mark.asyncio
async def test_get_event_attaches_organizer(storage, make_event, organizer):
    event = await make_event()

    fetched = await storage.get_event(event.id)
    assert fetched.organizer is not None
    assert fetched.organizer.id == organizer.id
    assert await storage.get_event("missing") is None


@pytest.mark.asyncio
async def test_list_events_for_organizer_includes_drafts(storage, make_event, organizer):
    await make_event(status="draft")
    await make_event(status="published")

    events = await storage.list_events_for_organizer(organizer.id)
    assert {e.status for e in events} == {"draft", "published"}


@pytest.mark.asyncio
async def test_update_event(storage, make_event, organizer_user):
    event = await make_event()

    updated = await storage.update_event(actor_for(organizer_user), event.id, {"title": "Renamed", "price": 50})
    assert updated.title == "Renamed"
    assert (await storage.get_event(event.id)).title == "Renamed"

    assert await storage.update_event(actor_for(organizer_user), "missing", {"title": "x"}) is None


@pytest.mark.asyncio
async def test_delete_event_cascades_registrations(storage, make_event, organizer_user, attendee):
    event = await make_event()
    await storage.register_for_event(actor_for(attendee), event.id, attendee.id)

    await storage.delete_event(actor_for(organizer_user), event.id)

    assert await storage.get_event(event.id) is None
    assert await storage.get_user_registrations(attendee.id) == []


@pytest.mark.asyncio
async def test_get_event_stats(storage, make_event, make_user):
    event = await make_event()
    await make_event(status="draft")
    for _ in range(3):
        user = await make_user()
        await storage.register_for_event(actor_for(user), event.id, user.id)
    provider_user = await make_user(role="service_provider")
    await storage.create_service_provider(
        actor_for(provider_user),
        {"user_id": provider_user.id, "business_name": "Lens Studio", "category": "photography"},
    )

    stats = await storage.get_event_stats()
    assert stats == {"total_events": 2, "total_attendees": 3, "total_providers": 1}
