"""Public id generation and the service clock."""
import uuid
from datetime import datetime, timezone


def new_public_id() -> str:
    """Return a fresh public location id."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC now. Both created_at and updated_at are stamped from this clock."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
