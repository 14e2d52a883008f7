"""Ownership check run before any location mutation."""
import logging

from sqlalchemy.orm import Session

from locations_core.errors import NotAuthorized
from locations_core.queries import build_ownership_query

LOG = logging.getLogger(__name__)


def verify_ownership(session: Session, owner_id: int, public_id: str) -> int:
    """Return the internal id of the location public_id if owner_id owns it.

    Raises NotAuthorized when the location is missing or owned by someone else;
    the two cases are deliberately indistinguishable.
    """
    internal_id = session.execute(build_ownership_query(owner_id, public_id)).scalar_one_or_none()
    if internal_id is None:
        LOG.info("User %s not authorized for location %s", owner_id, public_id)
        raise NotAuthorized()
    return internal_id
