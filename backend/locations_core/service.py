"""Location service: list, create, update, delete scoped to the calling user.

Each operation resolves the caller, runs its pre-checks (validation,
ownership) and only then executes the write, so nothing reaches the store
for a rejected request. All store errors surface as StoreFailure.
"""
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from locations_core.errors import StoreFailure, Unauthenticated, ValidationFailed
from locations_core.executor import run_write
from locations_core.guard import verify_ownership
from locations_core.identity import IdentityResolver
from locations_core.ids import new_public_id, utcnow
from locations_core.queries import (
    build_delete_query,
    build_insert_query,
    build_list_query,
    build_update_query,
)
from locations_core.types import LocationRecord
from models.user import User

LOG = logging.getLogger(__name__)


class LocationService:
    """Owner-scoped location operations over one session factory."""

    def __init__(
        self,
        session_factory: sessionmaker,
        identity_resolver: IdentityResolver,
        *,
        id_generator: Callable[[], str] = new_public_id,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._session_factory = session_factory
        self._identity_resolver = identity_resolver
        self._id_generator = id_generator
        self._clock = clock

    def _resolve(self, session: Session, caller_id: Optional[str]) -> User:
        if not caller_id:
            raise Unauthenticated()
        try:
            user = self._identity_resolver.resolve(session, caller_id)
        except SQLAlchemyError as exc:
            LOG.error("Identity lookup failed: %s", exc)
            raise StoreFailure() from exc
        if user is None:
            LOG.info("Unknown user %s", caller_id)
            raise Unauthenticated()
        return user

    def list_locations(self, caller_id: Optional[str], name: Optional[str] = None) -> list[LocationRecord]:
        """Return the caller's locations, optionally only those whose name contains name."""
        with self._session_factory() as session:
            user = self._resolve(session, caller_id)
            try:
                rows = session.execute(build_list_query(user.id, name)).all()
            except SQLAlchemyError as exc:
                LOG.error("Listing locations failed: %s", exc)
                raise StoreFailure() from exc
        return [
            LocationRecord(
                public_id=row.public_id,
                name=row.name,
                address=row.address,
                created_at=row.created_at,
                updated_at=row.updated_at,
            )
            for row in rows
        ]

    def create_location(self, caller_id: Optional[str], name: str, address: str) -> str:
        """Create a location owned by the caller and return its public id."""
        with self._session_factory() as session:
            user = self._resolve(session, caller_id)
            if not name:
                raise ValidationFailed("Field 'name' is required.")
            if not address:
                raise ValidationFailed("Field 'address' is required.")
            try:
                public_id = self._id_generator()
            except Exception as exc:
                LOG.error("Public id generation failed: %s", exc)
                raise StoreFailure() from exc
            try:
                run_write(session, build_insert_query(public_id, name, address, user.id, self._clock()))
            except SQLAlchemyError as exc:
                LOG.error("Creating location failed: %s", exc)
                raise StoreFailure() from exc
        LOG.info("Created location %s", public_id)
        return public_id

    def update_location(
        self,
        caller_id: Optional[str],
        public_id: str,
        name: Optional[str] = None,
        address: Optional[str] = None,
    ) -> None:
        """Overwrite the supplied, non-empty fields of a location the caller owns.

        A request with neither field still refreshes updated_at.
        """
        with self._session_factory() as session:
            user = self._resolve(session, caller_id)
            if not public_id:
                raise ValidationFailed("Field 'id' is required.")
            self._verify(session, user, public_id)
            stmt = build_update_query(public_id, {"name": name, "address": address}, self._clock())
            try:
                run_write(session, stmt)
            except SQLAlchemyError as exc:
                LOG.error("Updating location %s failed: %s", public_id, exc)
                raise StoreFailure() from exc
        LOG.info("Updated location %s", public_id)

    def delete_location(self, caller_id: Optional[str], public_id: str) -> None:
        """Delete a location the caller owns."""
        with self._session_factory() as session:
            user = self._resolve(session, caller_id)
            if not public_id:
                raise ValidationFailed("Field 'id' is required.")
            self._verify(session, user, public_id)
            try:
                run_write(session, build_delete_query(public_id))
            except SQLAlchemyError as exc:
                LOG.error("Deleting location %s failed: %s", public_id, exc)
                raise StoreFailure() from exc
        LOG.info("Deleted location %s", public_id)

    @staticmethod
    def _verify(session: Session, user: User, public_id: str) -> int:
        try:
            return verify_ownership(session, user.id, public_id)
        except SQLAlchemyError as exc:
            LOG.error("Ownership check for %s failed: %s", public_id, exc)
            raise StoreFailure() from exc
