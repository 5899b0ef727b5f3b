"""
Shared pytest fixtures.

Each test gets its own app from ``create_app`` bound to a private in-memory
SQLite store, with the tables created and one known user seeded.
"""

import base64

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from products_api.core.config import Settings
from products_api.core.database import build_session_factory, init_db
from products_api.core.seed import create_user
from products_api.main import create_app

USERNAME = "user1"
PASSWORD = "pass1"


def basic_auth(username: str, password: str) -> dict:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    return create_user(db, USERNAME, PASSWORD)


@pytest.fixture
def app(engine, user):
    return create_app(Settings(database_url="sqlite://", access_log=False), engine=engine)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth() -> dict:
    return basic_auth(USERNAME, PASSWORD)
