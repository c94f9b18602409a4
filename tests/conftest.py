"""
Shared fixtures: an in-memory Mongo (mongomock-motor) for gateway tests and
a TestClient-wrapped app for HTTP tests.
"""

from datetime import datetime

import pytest
from beanie import init_beanie
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from meetup.api.auth import create_access_token
from meetup.config import Settings
from meetup.database import DOCUMENT_MODELS
from meetup.main import create_application
from meetup.services.event_gateway import EventGateway
from meetup.services.user_gateway import UserGateway

TEST_SECRET = "f3b1c0d9e8a7b6c5d4e3f2a1b0c9d8e7"
TEST_DATABASE = "meetup_test"


@pytest.fixture
def settings():
    return Settings(jwt_secret=TEST_SECRET, mongodb_database=TEST_DATABASE)


@pytest.fixture
async def db():
    """Fresh in-memory database with Beanie initialized."""
    client = AsyncMongoMockClient()
    database = client[TEST_DATABASE]
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    yield database


@pytest.fixture
def events(db):
    return EventGateway()


@pytest.fixture
def users(db):
    return UserGateway()


@pytest.fixture
def event_data():
    """Valid create payload; created_by is filled in by each test."""
    return {
        "title": "Sunday doubles",
        "description": "Casual doubles at the park courts",
        "date": datetime(2026, 5, 1, 10, 0),
        "capacity": 4,
        "skill_level": "Intermediate",
        "location": "Riverside Park",
        "latitude": 40.8,
        "longitude": -73.97,
        "photo": "",
    }


@pytest.fixture
def app(settings):
    return create_application(settings=settings, mongo_client=AsyncMongoMockClient())


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(settings):
    """Build Authorization headers for a provider id; the user is created on first use."""

    def _make(google_id="google-alice", email="alice@example.com", name="Alice"):
        token = create_access_token(google_id, settings, email=email, name=name)
        return {"Authorization": f"Bearer {token}"}

    return _make
