"""
Tests for user storage: upsert conflict resolution, roles and session revocation.
"""

import pytest

from app.core.errors import ConflictError
from app.core.security import verify_password
from app.schemas.user import UserUpsert
from conftest import DEFAULT_PASSWORD, actor_for


@pytest.mark.asyncio
async def test_upsert_inserts_and_hashes_password(storage):
    """A new user is stored with a bcrypt hash, never the plaintext."""
    user = await storage.upsert_user(UserUpsert(
        email="sara@example.com",
        username="sara",
        password="correct-horse",
        first_name="Sara",
    ))

    assert user.id
    assert user.role == "attendee"
    assert user.password != "correct-horse"
    assert verify_password("correct-horse", user.password)

    fetched = await storage.get_user_by_email("sara@example.com")
    assert fetched.id == user.id
    assert (await storage.get_user_by_username("sara")).id == user.id


@pytest.mark.asyncio
async def test_upsert_with_existing_id_overwrites(storage, attendee):
    """Re-upserting by id updates the same row (OIDC re-login)."""
    updated = await storage.upsert_user(UserUpsert(
        id=attendee.id,
        email=attendee.email,
        first_name="Renamed",
        city="Jeddah",
    ))

    assert updated.id == attendee.id
    assert updated.first_name == "Renamed"
    assert updated.city == "Jeddah"
    # Fields not supplied are left alone
    assert verify_password(DEFAULT_PASSWORD, updated.password)


@pytest.mark.asyncio
async def test_upsert_existing_email_without_password_merges_profile(storage, attendee):
    """An OIDC login for a known email refreshes safe profile fields only."""
    merged = await storage.upsert_user(UserUpsert(
        id="oidc-subject-1",
        email=attendee.email,
        first_name="Nora",
        bio="Coffee and conferences",
    ))

    assert merged.id == attendee.id
    assert merged.first_name == "Nora"
    assert merged.bio == "Coffee and conferences"
    assert merged.last_name == attendee.last_name
    assert verify_password(DEFAULT_PASSWORD, merged.password)
    assert await storage.get_user("oidc-subject-1") is None


@pytest.mark.asyncio
async def test_upsert_existing_email_with_password_conflicts(storage, attendee):
    """Explicit registration with a taken email is a conflict."""
    with pytest.raises(ConflictError, match="User with this email already exists"):
        await storage.upsert_user(UserUpsert(
            email=attendee.email,
            username="someoneelse",
            password="another-password",
        ))


@pytest.mark.asyncio
async def test_upsert_existing_username_conflicts(storage, attendee):
    """A taken username is a conflict even with a fresh email."""
    with pytest.raises(ConflictError, match="Username already exists"):
        await storage.upsert_user(UserUpsert(
            email="fresh@example.com",
            username=attendee.username,
            password="another-password",
        ))


@pytest.mark.asyncio
async def test_update_user_role(storage, admin, attendee):
    """Admins can promote a user; unknown ids return None."""
    promoted = await storage.update_user_role(actor_for(admin), attendee.id, "organizer")
    assert promoted.role == "organizer"
    assert (await storage.get_user(attendee.id)).role == "organizer"

    assert await storage.update_user_role(actor_for(admin), "missing", "organizer") is None


@pytest.mark.asyncio
async def test_update_user_applies_partial_changes(storage, attendee):
    """Only supplied fields change."""
    updated = await storage.update_user(actor_for(attendee), attendee.id, {"city": "Dammam"})
    assert updated.city == "Dammam"
    assert updated.first_name == attendee.first_name
    assert await storage.update_user(actor_for(attendee), "missing", {"city": "Dammam"}) is None


@pytest.mark.asyncio
async def test_invalidate_user_sessions_bumps_token_version(storage, attendee):
    """Revoking sessions increments token_version."""
    before = attendee.token_version
    await storage.invalidate_user_sessions(attendee.id)
    assert (await storage.get_user(attendee.id)).token_version == before + 1


@pytest.mark.asyncio
async def test_list_users_filters_by_role_and_search(storage, make_user):
    """Role and search filters combine."""
    await make_user(role="attendee", first_name="Khalid")
    await make_user(role="organizer", first_name="Khalid")
    await make_user(role="organizer", first_name="Huda")

    organizers = await storage.list_users(role="organizer")
    assert len(organizers) == 2

    khalid_organizers = await storage.list_users(role="organizer", search="khal")
    assert [u.first_name for u in khalid_organizers] == ["Khalid"]


@pytest.mark.asyncio
async def test_delete_user(storage, admin, attendee):
    await storage.delete_user(actor_for(admin), attendee.id)
    assert await storage.get_user(attendee.id) is None
