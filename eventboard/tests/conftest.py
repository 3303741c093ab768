import os

# Ensure JWT_SECRET is set before eventboard.config is imported
os.environ["JWT_SECRET"] = "test_secret"

import pytest

from eventboard.database.db_connection import Database
from eventboard.events_service.models import EventStore
from eventboard.gateway.server import create_app
from eventboard.users_service.models import UserStore


@pytest.fixture
def db():
    """
    Fresh in-memory SQLite database per test.
    """
    with Database(":memory:") as database:
        yield database


@pytest.fixture
def app(db):
    app = create_app(db)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user_store(db):
    return UserStore(db)


@pytest.fixture
def event_store(db):
    return EventStore(db)


@pytest.fixture
def auth_headers(client):
    """
    Sign up and log in a user, returning headers that carry its token.
    """
    client.post("/users/signup", json={"email": "me@example.com", "password": "secret1", "name": "Me"})
    response = client.post("/users/login", json={"email": "me@example.com", "password": "secret1"})
    token = response.get_json()["token"]
    return {"Authorization": f"Bearer {token}"}
