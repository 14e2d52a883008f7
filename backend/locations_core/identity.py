"""Resolve an authenticated caller's public user id to the internal user row."""
from typing import Optional, Protocol

from sqlalchemy.orm import Session

from models.user import User
from repositories.user_repository import get_user_by_public_id


class IdentityResolver(Protocol):
    """Maps the caller id carried by a token to a User, or None if unknown."""

    def resolve(self, session: Session, caller_id: str) -> Optional[User]:
        ...


class DatabaseIdentityResolver:
    """IdentityResolver backed by the users table."""

    def resolve(self, session: Session, caller_id: str) -> Optional[User]:
        return get_user_by_public_id(session, caller_id)
