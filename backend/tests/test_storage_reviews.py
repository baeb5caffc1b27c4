"""
Tests for reviews and the service provider rating aggregate.
"""

from decimal import Decimal

import pytest

from app.core.errors import NotFoundError
from app.schemas.review import ReviewCreate
from conftest import actor_for


async def _provider(storage, make_user):
    owner = await make_user(role="service_provider")
    return await storage.create_service_provider(
        actor_for(owner),
        {"user_id": owner.id, "business_name": "Desert Catering", "category": "catering"},
    )


def _provider_review(provider_id: str, rating: int) -> ReviewCreate:
    return ReviewCreate(target={"kind": "service_provider", "id": provider_id}, rating=rating)


@pytest.mark.asyncio
async def test_provider_rating_is_mean_of_reviews(storage, make_user):
    """rating = round(mean, 2) and review_count = number of reviews."""
    provider = await _provider(storage, make_user)

    for rating in (5, 4, 4):
        reviewer = await make_user()
        await storage.create_review(actor_for(reviewer), _provider_review(provider.id, rating))

    refreshed = await storage.get_service_provider(provider.id)
    assert refreshed.review_count == 3
    assert refreshed.rating == Decimal("4.33")


@pytest.mark.asyncio
async def test_first_review_sets_rating(storage, make_user, attendee):
    provider = await _provider(storage, make_user)
    assert provider.review_count == 0

    review = await storage.create_review(actor_for(attendee), _provider_review(provider.id, 3))

    assert review.reviewer_id == attendee.id
    assert review.target_type == "service_provider"
    refreshed = await storage.get_service_provider(provider.id)
    assert refreshed.rating == Decimal("3.00")
    assert refreshed.review_count == 1


@pytest.mark.asyncio
async def test_event_review_does_not_touch_providers(storage, make_user, make_event, attendee):
    provider = await _provider(storage, make_user)
    event = await make_event()

    await storage.create_review(
        actor_for(attendee),
        ReviewCreate(target={"kind": "event", "id": event.id}, rating=5, comment="Great"),
    )

    refreshed = await storage.get_service_provider(provider.id)
    assert refreshed.review_count == 0
    assert [r.comment for r in await storage.get_reviews("event", event.id)] == ["Great"]


@pytest.mark.asyncio
async def test_review_for_unknown_target_is_rejected(storage, attendee):
    with pytest.raises(NotFoundError):
        await storage.create_review(actor_for(attendee), _provider_review("missing", 4))

    # The insert was rolled back with the failed check
    assert await storage.get_reviews("service_provider", "missing") == []


@pytest.mark.asyncio
async def test_reviews_are_listed_newest_first(storage, make_event, make_user):
    event = await make_event()
    for rating in (1, 2, 3):
        reviewer = await make_user()
        await storage.create_review(
            actor_for(reviewer),
            ReviewCreate(target={"kind": "event", "id": event.id}, rating=rating),
        )

    reviews = await storage.get_reviews("event", event.id)
    assert [r.rating for r in reviews] == [3, 2, 1]
