"""Value types passed out of the location service."""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LocationRecord:
    """A location as seen by its owner. The owner reference is never exposed."""

    public_id: str
    name: str
    address: str
    created_at: datetime
    updated_at: datetime
