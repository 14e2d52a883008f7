"""Integration tests: LocationService against the test database."""
from datetime import datetime, timedelta

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from db import SessionLocal
from locations_core import (
    LocationService,
    NotAuthorized,
    StoreFailure,
    Unauthenticated,
    ValidationFailed,
)
from locations_core.identity import DatabaseIdentityResolver
from models.location import Location

pytestmark = pytest.mark.integration

START = datetime(2100, 1, 1, 0, 0, 0)
LATER = START + timedelta(minutes=1)


@pytest.fixture
def users(make_user):
    """Users A and B; returns their public ids."""
    make_user("user-a")
    make_user("user-b")
    return "user-a", "user-b"


def _service(**kwargs) -> LocationService:
    return LocationService(SessionLocal, DatabaseIdentityResolver(), **kwargs)


def _ticking_clock(*times: datetime):
    """Clock returning the given times in order, one per call."""
    ticks = iter(times)
    return lambda: next(ticks)


def _get(public_id: str) -> Location | None:
    with SessionLocal() as session:
        return session.execute(select(Location).where(Location.public_id == public_id)).scalar_one_or_none()


def test_create_then_list(service, users):
    """A created location is listed for its owner with the supplied fields."""
    a, _ = users
    public_id = service.create_location(a, "Home", "1 Oak St")
    records = service.list_locations(a)
    assert [r.public_id for r in records] == [public_id]
    assert records[0].name == "Home"
    assert records[0].address == "1 Oak St"
    assert records[0].created_at is not None
    assert records[0].updated_at is not None


def test_create_sets_owner_and_unique_public_ids(service, users):
    """Owner is the creating user; each creation gets a new public id."""
    a, _ = users
    first = service.create_location(a, "Home", "1 Oak St")
    second = service.create_location(a, "Work", "9 Elm St")
    assert first != second
    with SessionLocal() as session:
        owner_ids = set(session.execute(select(Location.created_by)).scalars().all())
        user_a_id = DatabaseIdentityResolver().resolve(session, a).id
    assert owner_ids == {user_a_id}


def test_list_never_includes_other_users_locations(service, users):
    """List is scoped to the caller."""
    a, b = users
    service.create_location(a, "Home", "1 Oak St")
    assert service.list_locations(b) == []


def test_list_name_filter_substring(service, users):
    """Name filter returns only the caller's locations whose name contains the value."""
    a, b = users
    service.create_location(a, "oak grove", "1 Grove Rd")
    service.create_location(a, "big oak", "2 Big Rd")
    service.create_location(a, "elm house", "3 Elm Rd")
    service.create_location(b, "oak cabin", "4 Cabin Rd")
    names = sorted(r.name for r in service.list_locations(a, "oak"))
    assert names == ["big oak", "oak grove"]


def test_list_name_filter_wildcards_are_literal(service, users):
    """LIKE wildcards in the filter match literally."""
    a, _ = users
    service.create_location(a, "100% oak", "1 Grove Rd")
    service.create_location(a, "plain", "2 Big Rd")
    assert [r.name for r in service.list_locations(a, "%")] == ["100% oak"]


def test_unauthenticated_caller_rejected(service, users):
    """No caller id or an unknown user is unauthenticated."""
    with pytest.raises(Unauthenticated):
        service.list_locations(None)
    with pytest.raises(Unauthenticated):
        service.create_location("ghost", "Home", "1 Oak St")
    with pytest.raises(Unauthenticated):
        service.update_location("", "any-id", name="x")
    with pytest.raises(Unauthenticated):
        service.delete_location("ghost", "any-id")


@pytest.mark.parametrize("name,address", [("", "1 Oak St"), ("Home", "")])
def test_create_requires_name_and_address(service, users, name, address):
    """Empty name or address is a validation failure and nothing is stored."""
    a, _ = users
    with pytest.raises(ValidationFailed):
        service.create_location(a, name, address)
    assert service.list_locations(a) == []


def test_update_and_delete_require_public_id(service, users):
    """Missing public id is a validation failure."""
    a, _ = users
    with pytest.raises(ValidationFailed):
        service.update_location(a, "", name="x")
    with pytest.raises(ValidationFailed):
        service.delete_location(a, "")


def test_partial_update_name_only(users):
    """Updating only name keeps address and advances updated_at."""
    a, _ = users
    service = _service(clock=_ticking_clock(START, LATER))
    public_id = service.create_location(a, "Home", "1 Oak St")
    before = _get(public_id)
    service.update_location(a, public_id, name="Work")
    after = _get(public_id)
    assert after.name == "Work"
    assert after.address == "1 Oak St"
    assert after.updated_at == LATER
    assert after.updated_at > before.updated_at
    assert after.created_at == before.created_at
    assert after.created_by == before.created_by


def test_create_and_update_share_one_clock(users):
    """Insert stamps both timestamps and updates stamp updated_at from the same clock."""
    a, _ = users
    service = _service(clock=_ticking_clock(START, LATER))
    public_id = service.create_location(a, "Home", "1 Oak St")
    created = _get(public_id)
    assert created.created_at == START
    assert created.updated_at == START
    service.update_location(a, public_id, address="2 Oak St")
    updated = _get(public_id)
    assert updated.created_at == START
    assert updated.updated_at == LATER


def test_update_empty_strings_leave_fields_unchanged(users):
    """Empty strings count as not supplied."""
    a, _ = users
    service = _service(clock=_ticking_clock(START, LATER))
    public_id = service.create_location(a, "Home", "1 Oak St")
    service.update_location(a, public_id, name="", address="2 Oak St")
    after = _get(public_id)
    assert after.name == "Home"
    assert after.address == "2 Oak St"


def test_update_without_fields_is_timestamp_refresh(users):
    """An update carrying only the id is accepted and only refreshes updated_at."""
    a, _ = users
    service = _service(clock=_ticking_clock(START, LATER))
    public_id = service.create_location(a, "Home", "1 Oak St")
    service.update_location(a, public_id)
    after = _get(public_id)
    assert (after.name, after.address) == ("Home", "1 Oak St")
    assert after.updated_at == LATER


def test_update_by_other_user_not_authorized(service, users):
    """User B cannot update A's location and A's record is unchanged."""
    a, b = users
    public_id = service.create_location(a, "Home", "1 Oak St")
    before = _get(public_id)
    with pytest.raises(NotAuthorized):
        service.update_location(b, public_id, name="Hijacked", address="0 Evil St")
    after = _get(public_id)
    assert (after.name, after.address, after.updated_at) == (before.name, before.address, before.updated_at)


def test_update_missing_location_not_authorized(service, users):
    """Updating an unknown public id fails the same way as someone else's."""
    a, _ = users
    with pytest.raises(NotAuthorized):
        service.update_location(a, "no-such-location", name="x")


def test_delete_removes_only_target(service, users):
    """Delete removes exactly the verified location."""
    a, _ = users
    keep = service.create_location(a, "Home", "1 Oak St")
    drop = service.create_location(a, "Work", "9 Elm St")
    service.delete_location(a, drop)
    assert [r.public_id for r in service.list_locations(a)] == [keep]


def test_second_delete_not_authorized(service, users):
    """Deleting the same location twice fails the second time."""
    a, _ = users
    public_id = service.create_location(a, "Home", "1 Oak St")
    service.delete_location(a, public_id)
    with pytest.raises(NotAuthorized):
        service.delete_location(a, public_id)


def test_delete_by_other_user_not_authorized(service, users):
    """User B cannot delete A's location."""
    a, b = users
    public_id = service.create_location(a, "Home", "1 Oak St")
    with pytest.raises(NotAuthorized):
        service.delete_location(b, public_id)
    assert _get(public_id) is not None


def test_duplicate_public_id_is_store_failure(users):
    """A colliding generated id aborts the insert; the first location is untouched."""
    a, _ = users
    service = _service(id_generator=lambda: "fixed-id")
    service.create_location(a, "Home", "1 Oak St")
    with pytest.raises(StoreFailure):
        service.create_location(a, "Work", "9 Elm St")
    assert [r.name for r in service.list_locations(a)] == ["Home"]


def test_id_generation_failure_is_store_failure(users):
    """Id generator errors surface as StoreFailure and nothing is stored."""
    a, _ = users

    def broken() -> str:
        raise RuntimeError("entropy exhausted")

    service = _service(id_generator=broken)
    with pytest.raises(StoreFailure):
        service.create_location(a, "Home", "1 Oak St")
    assert service.list_locations(a) == []


def test_write_failure_is_store_failure(service, users, monkeypatch):
    """An executor error on update is wrapped as StoreFailure with the cause chained."""
    a, _ = users
    public_id = service.create_location(a, "Home", "1 Oak St")
    error = OperationalError("UPDATE", {}, Exception("disk I/O error"))

    def failing_write(session, statement):
        raise error

    monkeypatch.setattr("locations_core.service.run_write", failing_write)
    with pytest.raises(StoreFailure) as excinfo:
        service.update_location(a, public_id, name="Work")
    assert excinfo.value.__cause__ is error
    assert excinfo.value.message == StoreFailure.default_message
    assert "disk I/O error" not in excinfo.value.message
    assert _get(public_id).name == "Home"
