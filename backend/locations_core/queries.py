"""Statement builders for the locations table.

Every builder is pure: it returns a SQLAlchemy Core statement and touches no
session. Caller-supplied values only ever reach the statement as bound
parameters, including the name filter used for substring matching.
"""
from collections.abc import Mapping
from datetime import datetime
from typing import Optional

from sqlalchemy import Delete, Insert, Select, Update, delete, insert, select, update

from models.location import Location

locations = Location.__table__

# Columns a partial update may touch. updated_at is always set by the builder.
UPDATABLE_COLUMNS = ("name", "address")


def build_list_query(owner_id: int, name_filter: Optional[str] = None) -> Select:
    """Select every location owned by owner_id, optionally narrowed to names containing name_filter."""
    stmt = select(
        locations.c.public_id,
        locations.c.name,
        locations.c.address,
        locations.c.created_at,
        locations.c.updated_at,
    ).where(locations.c.created_by == owner_id)
    if name_filter:
        stmt = stmt.where(locations.c.name.contains(name_filter, autoescape=True))
    return stmt


def build_ownership_query(owner_id: int, public_id: str) -> Select:
    """Select the internal id of the location matching both public_id and owner_id."""
    return select(locations.c.id).where(
        locations.c.public_id == public_id,
        locations.c.created_by == owner_id,
    )


def build_insert_query(public_id: str, name: str, address: str, owner_id: int, now: datetime) -> Insert:
    """Insert a new location stamped with now, the same clock later updates use."""
    return insert(locations).values(
        public_id=public_id,
        name=name,
        address=address,
        created_by=owner_id,
        created_at=now,
        updated_at=now,
    )


def collect_set_clauses(fields: Mapping[str, Optional[str]]) -> dict[str, str]:
    """Fold (column, optional value) pairs into the columns that should be overwritten.

    Absent (None) and empty values are dropped so a partial update never
    clears a column the caller did not mention.
    """
    clauses: dict[str, str] = {}
    for column, value in fields.items():
        if column not in UPDATABLE_COLUMNS:
            raise ValueError(f"Column {column!r} cannot be updated")
        if value:
            clauses[column] = value
    return clauses


def build_update_query(public_id: str, fields: Mapping[str, Optional[str]], now: datetime) -> Update:
    """Update the supplied, non-empty fields of one location and refresh updated_at.

    With no fields supplied the statement only refreshes updated_at.
    """
    values: dict[str, object] = dict(collect_set_clauses(fields))
    values["updated_at"] = now
    return update(locations).where(locations.c.public_id == public_id).values(**values)


def build_delete_query(public_id: str) -> Delete:
    """Delete the location with this public id. Ownership is checked beforehand by the guard."""
    return delete(locations).where(locations.c.public_id == public_id)
