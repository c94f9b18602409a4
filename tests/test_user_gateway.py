"""
Tests for user persistence and account removal
"""

import pytest
from beanie import PydanticObjectId
from pymongo.errors import ServerSelectionTimeoutError

from meetup.errors import Conflict, PersistenceError, ValidationError
from meetup.models import User
from meetup.services import user_service
from meetup.services.event_gateway import EventGateway


def user_payload(**overrides):
    payload = {
        "email": "carol@example.com",
        "name": "Carol",
        "google_id": "google-carol",
        "age": 29,
        "bio": "Weekend climber",
        "location": "Boulder",
        "latitude": 40.01,
        "longitude": -105.27,
        "profile_picture": "http://example.com/carol.jpg",
        "skill_level": "Beginner",
    }
    payload.update(overrides)
    return payload


async def test_create_and_find(users):
    user = await users.create(user_payload())

    stored = await users.find_by_id(user.id)
    assert stored.email == "carol@example.com"
    assert stored.name == "Carol"
    assert stored.age == 29
    assert stored.skill_level.value == "Beginner"


async def test_find_by_google_id(users):
    user = await users.create(user_payload())

    found = await users.find_by_google_id("google-carol")
    assert found.id == user.id
    assert await users.find_by_google_id("google-nobody") is None


async def test_duplicate_email_is_conflict(users):
    await users.create(user_payload())

    with pytest.raises(Conflict, match="User already exists"):
        await users.create(user_payload(google_id="google-other"))


async def test_duplicate_google_id_is_conflict(users):
    await users.create(user_payload())

    with pytest.raises(Conflict, match="User already exists"):
        await users.create(user_payload(email="carol.two@example.com"))

    assert await User.find_all().count() == 1


async def test_users_without_google_id_coexist(users):
    first = await users.create(user_payload(google_id=None))
    second = await users.create(user_payload(email="frank@example.com", name="Frank", google_id=None))

    assert first.id != second.id
    assert await User.find_all().count() == 2


async def test_invalid_create_rejected(users):
    with pytest.raises(ValidationError):
        await users.create(user_payload(age=-5))

    assert await User.find_all().count() == 0


async def test_update_profile(users):
    user = await users.create(user_payload())

    updated = await users.update(user.id, {"name": "Carol B", "skill_level": "Expert"})

    assert updated.name == "Carol B"
    assert updated.skill_level.value == "Expert"
    assert updated.email == "carol@example.com"


async def test_update_missing_returns_none(users):
    assert await users.update(PydanticObjectId(), {"name": "Ghost"}) is None


async def test_find_all_and_delete(users):
    first = await users.create(user_payload())
    await users.create(user_payload(email="dan@example.com", google_id="google-dan", name="Dan"))

    assert len(await users.find_all()) == 2

    await users.delete(first.id)
    await users.delete(first.id)

    assert await users.find_by_id(first.id) is None
    assert len(await users.find_all()) == 1


async def test_find_by_google_id_store_failure(users, monkeypatch):
    async def store_down(*args, **kwargs):
        raise ServerSelectionTimeoutError("connection refused")

    monkeypatch.setattr(User, "find_one", store_down)

    with pytest.raises(PersistenceError, match="Failed to find user"):
        await users.find_by_google_id("google-carol")


async def test_delete_user_leaves_created_events(users, events, event_data):
    owner = await users.create(user_payload())
    member = await users.create(user_payload(email="erin@example.com", google_id="google-erin", name="Erin"))
    event = await events.create({**event_data, "created_by": owner.id, "attendees": [owner.id, member.id]})

    await user_service.delete_user(users, events, owner.id)

    assert await users.find_by_id(owner.id) is None
    stored = await events.find_by_id(event.id)
    assert stored is not None
    assert stored.attendees == [member.id]


async def test_failed_cleanup_keeps_user_for_retry(users, events, event_data, monkeypatch):
    owner = await users.create(user_payload())
    event = await events.create({**event_data, "created_by": owner.id, "attendees": [owner.id]})

    async def store_down(self, user_id):
        raise PersistenceError("Failed to update events")

    with monkeypatch.context() as patched:
        patched.setattr(EventGateway, "remove_attendee_everywhere", store_down)
        with pytest.raises(PersistenceError):
            await user_service.delete_user(users, events, owner.id)

    assert await users.find_by_id(owner.id) is not None

    await user_service.delete_user(users, events, owner.id)

    assert await users.find_by_id(owner.id) is None
    assert (await events.find_by_id(event.id)).attendees == []
