# Set test environment before any application or db imports.
import os

os.environ["TESTING"] = "true"
os.environ["TESTING_DATABASE_URL"] = "sqlite:///:memory:"

import pytest
from fastapi.testclient import TestClient

from api.locations import get_location_service
from auth import create_access_token
from db import SessionLocal
from locations_core import LocationService
from locations_core.identity import DatabaseIdentityResolver
from main import app
from models import Base
from models.location import Location  # noqa: F401 - register with Base
from models.user import User  # noqa: F401
from repositories.user_repository import create_user


def _get_engine():
    """Engine used by the app (in-memory when TESTING=true)."""
    return SessionLocal.kw["bind"]


@pytest.fixture(scope="session")
def engine():
    """One in-memory engine per test run; create tables once."""
    eng = _get_engine()
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture
def db_session(engine):
    """Function-scoped session; all rows are deleted after the test."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        with engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                conn.execute(table.delete())


@pytest.fixture
def make_user(db_session):
    """Factory: create a user row with the given public id."""
    def _make(public_id: str) -> User:
        return create_user(db_session, public_id)
    return _make


@pytest.fixture
def service(db_session):
    """LocationService over the test database."""
    return LocationService(SessionLocal, DatabaseIdentityResolver())


@pytest.fixture
def auth_header():
    """Factory: Authorization header carrying a token for the given user public id."""
    def _header(public_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(public_id)}"}
    return _header


@pytest.fixture
def client(service):
    """API test client; overrides the location service with the test one, cleared on teardown."""
    app.dependency_overrides[get_location_service] = lambda: service
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
