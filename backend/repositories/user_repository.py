"""User repository: lookup by public id, create."""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.user import User


def get_user_by_public_id(session: Session, public_id: str) -> Optional[User]:
    """Return the user with this public id or None."""
    return session.execute(select(User).where(User.public_id == public_id)).scalar_one_or_none()


def create_user(session: Session, public_id: str) -> User:
    """Create a user, commit, and return it."""
    user = User(public_id=public_id)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def get_or_create_user(session: Session, public_id: str) -> User:
    """Return the existing user for public_id, creating it if missing."""
    user = get_user_by_public_id(session, public_id)
    if user is not None:
        return user
    return create_user(session, public_id)
