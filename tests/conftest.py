"""Test fixtures — in-memory SQLite per test + FastAPI test client.

Every test gets a fresh database; get_db is overridden so requests and the
test's own session see the same data. Tokens are minted with the same helper
the auth service uses, so routes exercise real bearer verification.
"""
import os

# Must be set before app modules build the engine and settings
os.environ.setdefault("DATABASE_DSN", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.database import Base, get_db
from app.main import app
from app.models.user import User
import app.models as _models  # noqa: F401


@pytest.fixture
def test_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """FastAPI test client with DB dependency overridden."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Create and commit a user; returns the User row"""
    counter = {"n": 0}

    def _make_user(skills=None, **fields):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            first_name=fields.pop("first_name", f"First{n}"),
            last_name=fields.pop("last_name", f"Last{n}"),
            username=fields.pop("username", f"user{n}"),
            email=fields.pop("email", f"user{n}@example.com"),
            skills=skills,
            **fields
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def scenario_users(make_user):
    """A(Go,Rust), B(Go,Python), C(Rust)"""
    a = make_user(skills="Go,Rust", username="alice")
    b = make_user(skills="Go,Python", username="bob")
    c = make_user(skills="Rust", username="carol")
    return a, b, c


def auth_headers(user_id: int) -> dict:
    token = create_access_token({"sub": str(user_id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers
