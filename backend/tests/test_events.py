"""
Tests for event endpoints: CRUD, listing, registrations and sponsorships.
"""

import pytest
from datetime import datetime, timezone, timedelta
from httpx import AsyncClient

from conftest import actor_for, auth_headers_for


def _event_body(**overrides) -> dict:
    start = datetime.now(timezone.utc) + timedelta(days=30)
    return {
        "title": "Python Conference 2026",
        "description": "Annual Python gathering",
        "category": "technology",
        "startDate": start.isoformat(),
        "endDate": (start + timedelta(hours=8)).isoformat(),
        "location": "Convention Center",
        "city": "Riyadh",
        "status": "published",
        **overrides,
    }


@pytest.mark.asyncio
async def test_organizer_onboarding_flow(client: AsyncClient, storage, admin):
    """
    Register, log in, get refused event creation as an attendee, get promoted
    by an admin, then create an event owned by a fresh organizer profile.
    """
    register = await client.post("/api/auth/register", json={
        "email": "host@example.com",
        "username": "host",
        "password": "hostpassword1",
        "confirmPassword": "hostpassword1",
        "firstName": "Event",
        "lastName": "Host",
    })
    assert register.status_code == 201
    user_id = register.json()["id"]

    bad_login = await client.post("/api/auth/login", json={"email": "host@example.com", "password": "nope"})
    assert bad_login.status_code == 401

    login = await client.post("/api/auth/login", json={"email": "host@example.com", "password": "hostpassword1"})
    assert login.status_code == 200
    token = login.headers["set-cookie"].split(";")[0].partition("=")[2]
    host_headers = {"Cookie": f"session={token}"}
    # Later requests in this test act as other users via Bearer headers
    client.cookies.clear()

    refused = await client.post("/api/events", json=_event_body(), headers=host_headers)
    assert refused.status_code == 403

    promote = await client.patch(
        f"/api/users/{user_id}/role",
        json={"role": "organizer"},
        headers=auth_headers_for(admin),
    )
    assert promote.status_code == 200
    assert promote.json()["role"] == "organizer"

    created = await client.post("/api/events", json=_event_body(), headers=host_headers)
    assert created.status_code == 201

    profile = await storage.get_organizer_by_user_id(user_id)
    assert profile.email == "host@example.com"
    assert profile.business_name == "Event Host"
    assert created.json()["organizerId"] == profile.id

    mine = await client.get("/api/user/events", headers=host_headers)
    assert [e["id"] for e in mine.json()] == [created.json()["id"]]


@pytest.mark.asyncio
async def test_create_event_reuses_existing_profile(client: AsyncClient, organizer, organizer_user):
    response = await client.post("/api/events", json=_event_body(), headers=auth_headers_for(organizer_user))
    assert response.status_code == 201
    data = response.json()
    assert data["organizerId"] == organizer.id
    assert data["currency"] == "SAR"
    assert data["sponsor1Id"] is None


@pytest.mark.asyncio
async def test_create_event_unauthenticated(client: AsyncClient):
    """Unauthenticated request returns 401."""
    response = await client.post("/api/events", json=_event_body())
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_event_end_before_start(client: AsyncClient, organizer_user):
    """endDate not after startDate returns 400."""
    body = _event_body()
    body["endDate"] = body["startDate"]
    response = await client.post("/api/events", json=body, headers=auth_headers_for(organizer_user))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_event_unknown_venue(client: AsyncClient, organizer_user):
    response = await client.post(
        "/api/events",
        json=_event_body(venueId="missing"),
        headers=auth_headers_for(organizer_user),
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_events_only_published_with_filters(client: AsyncClient, make_event):
    """Drafts are hidden; filters combine."""
    await make_event(title="Riyadh Jazz Night", category="music")
    await make_event(title="Jeddah Jazz Night", category="music", city="Jeddah")
    await make_event(title="Draft Jazz", category="music", status="draft")
    await make_event(title="Data Summit")

    response = await client.get("/api/events")
    assert response.status_code == 200
    assert len(response.json()) == 3

    response = await client.get("/api/events", params={"category": "music", "city": "Riyadh"})
    assert [e["title"] for e in response.json()] == ["Riyadh Jazz Night"]

    response = await client.get("/api/events", params={"search": "JAZZ"})
    assert sorted(e["title"] for e in response.json()) == ["Jeddah Jazz Night", "Riyadh Jazz Night"]


@pytest.mark.asyncio
async def test_list_events_latest_start_first(client: AsyncClient, make_event):
    soon = datetime.now(timezone.utc) + timedelta(days=2)
    later = datetime.now(timezone.utc) + timedelta(days=60)
    await make_event(title="Soon", start_date=soon, end_date=soon + timedelta(hours=2))
    await make_event(title="Later", start_date=later, end_date=later + timedelta(hours=2))

    response = await client.get("/api/events", params={"limit": 1})
    assert [e["title"] for e in response.json()] == ["Later"]

    response = await client.get("/api/events", params={"limit": 1, "offset": 1})
    assert [e["title"] for e in response.json()] == ["Soon"]


@pytest.mark.asyncio
async def test_get_event(client: AsyncClient, make_event, organizer):
    """Get single event by ID with its organizer."""
    event = await make_event()
    response = await client.get(f"/api/events/{event.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == event.id
    assert data["title"] == "Tech Summit"
    assert data["organizer"]["businessName"] == organizer.business_name


@pytest.mark.asyncio
async def test_get_event_not_found(client: AsyncClient):
    """Non-existent event returns 404."""
    response = await client.get("/api/events/99999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_event_owner_only(client: AsyncClient, make_event, make_user, organizer_user, admin):
    event = await make_event()
    stranger = await make_user(role="organizer")

    response = await client.patch(
        f"/api/events/{event.id}", json={"title": "Hijacked"}, headers=auth_headers_for(stranger)
    )
    assert response.status_code == 403

    response = await client.patch(
        f"/api/events/{event.id}", json={"title": "Renamed"}, headers=auth_headers_for(organizer_user)
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"

    response = await client.patch(
        f"/api/events/{event.id}", json={"status": "cancelled"}, headers=auth_headers_for(admin)
    )
    assert response.json()["status"] == "cancelled"


@pytest.mark.asyncio
async def test_update_event_rejects_end_before_stored_start(client: AsyncClient, make_event, organizer_user):
    event = await make_event()
    response = await client.patch(
        f"/api/events/{event.id}",
        json={"endDate": (event.start_date - timedelta(hours=1)).isoformat()},
        headers=auth_headers_for(organizer_user),
    )
    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"title": None}, {"startDate": None}, {"endDate": None}, {"price": None}])
async def test_update_event_rejects_null_required_fields(client: AsyncClient, make_event, organizer_user, body):
    event = await make_event()

    response = await client.patch(f"/api/events/{event.id}", json=body, headers=auth_headers_for(organizer_user))
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"

    unchanged = (await client.get(f"/api/events/{event.id}")).json()
    assert unchanged["title"] == "Tech Summit"
    assert unchanged["startDate"] is not None


@pytest.mark.asyncio
async def test_update_event_clears_optional_fields(client: AsyncClient, make_event, organizer_user):
    event = await make_event(title_ar="قمة التقنية")

    response = await client.patch(
        f"/api/events/{event.id}", json={"titleAr": None}, headers=auth_headers_for(organizer_user)
    )
    assert response.status_code == 200
    assert response.json()["titleAr"] is None


@pytest.mark.asyncio
async def test_delete_event(client: AsyncClient, make_event, organizer_user, attendee):
    event = await make_event()

    response = await client.delete(f"/api/events/{event.id}", headers=auth_headers_for(attendee))
    assert response.status_code == 403

    response = await client.delete(f"/api/events/{event.id}", headers=auth_headers_for(organizer_user))
    assert response.status_code == 204
    assert (await client.get(f"/api/events/{event.id}")).status_code == 404


@pytest.mark.asyncio
async def test_register_cancel_and_check_in(client: AsyncClient, make_event, attendee, organizer_user):
    event = await make_event()
    headers = auth_headers_for(attendee)

    response = await client.post(f"/api/events/{event.id}/register", headers=headers)
    assert response.status_code == 201
    registration = response.json()
    assert registration["status"] == "registered"
    assert len(registration["ticketCode"]) == 8

    mine = await client.get("/api/user/registrations", headers=headers)
    assert [r["id"] for r in mine.json()] == [registration["id"]]

    # Attendee lists are for the owner only
    assert (await client.get(f"/api/events/{event.id}/registrations", headers=headers)).status_code == 403
    owner_view = await client.get(
        f"/api/events/{event.id}/registrations", headers=auth_headers_for(organizer_user)
    )
    assert [r["attendeeId"] for r in owner_view.json()] == [attendee.id]

    attend = await client.post(
        f"/api/registrations/{registration['id']}/attend", headers=auth_headers_for(organizer_user)
    )
    assert attend.status_code == 200
    assert attend.json()["status"] == "attended"

    again = await client.post(
        f"/api/registrations/{registration['id']}/attend", headers=auth_headers_for(organizer_user)
    )
    assert again.status_code == 409


@pytest.mark.asyncio
async def test_cancel_registration(client: AsyncClient, make_event, attendee):
    event = await make_event()
    headers = auth_headers_for(attendee)
    await client.post(f"/api/events/{event.id}/register", headers=headers)

    response = await client.delete(f"/api/events/{event.id}/register", headers=headers)
    assert response.status_code == 204

    mine = await client.get("/api/user/registrations", headers=headers)
    assert [r["status"] for r in mine.json()] == ["cancelled"]


@pytest.mark.asyncio
async def test_register_for_unknown_event(client: AsyncClient, attendee):
    response = await client.post("/api/events/missing/register", headers=auth_headers_for(attendee))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_event_sponsorships(client: AsyncClient, storage, make_event, make_user, organizer_user):
    event = await make_event()
    sponsor_owner = await make_user(role="sponsor")
    sponsor = await storage.create_sponsor(actor_for(sponsor_owner), {"user_id": sponsor_owner.id, "name": "Aramco"})
    owner_headers = auth_headers_for(organizer_user)

    response = await client.post(
        f"/api/events/{event.id}/sponsors",
        json={"sponsorId": sponsor.id, "tier": "gold"},
        headers=auth_headers_for(sponsor_owner),
    )
    assert response.status_code == 403

    response = await client.post(
        f"/api/events/{event.id}/sponsors",
        json={"sponsorId": sponsor.id, "tier": "gold"},
        headers=owner_headers,
    )
    assert response.status_code == 201
    assert response.json()["sponsor"]["name"] == "Aramco"

    duplicate = await client.post(
        f"/api/events/{event.id}/sponsors", json={"sponsorId": sponsor.id}, headers=owner_headers
    )
    assert duplicate.status_code == 409

    assert (await client.get(f"/api/events/{event.id}")).json()["sponsor1Id"] == sponsor.id

    response = await client.patch(
        f"/api/events/{event.id}/sponsors/{sponsor.id}", json={"tier": "platinum"}, headers=owner_headers
    )
    assert response.json()["tier"] == "platinum"

    listed = await client.get(f"/api/events/{event.id}/sponsors")
    assert [link["sponsorId"] for link in listed.json()] == [sponsor.id]

    response = await client.delete(f"/api/events/{event.id}/sponsors/{sponsor.id}", headers=owner_headers)
    assert response.status_code == 204
    assert (await client.get(f"/api/events/{event.id}")).json()["sponsor1Id"] is None

    missing = await client.patch(
        f"/api/events/{event.id}/sponsors/{sponsor.id}", json={"tier": "gold"}, headers=owner_headers
    )
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_stats(client: AsyncClient, make_event, attendee, storage):
    event = await make_event()
    await make_event(status="draft")
    await storage.register_for_event(actor_for(attendee), event.id, attendee.id)

    response = await client.get("/api/stats")
    assert response.status_code == 200
    assert response.json() == {"totalEvents": 2, "totalAttendees": 1, "totalProviders": 0}


@pytest.mark.asyncio
async def test_list_users_requires_admin(client: AsyncClient, attendee, admin):
    assert (await client.get("/api/users", headers=auth_headers_for(attendee))).status_code == 403

    response = await client.get("/api/users", params={"role": "admin"}, headers=auth_headers_for(admin))
    assert [u["id"] for u in response.json()] == [admin.id]
