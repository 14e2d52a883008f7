"""Access-controlled location mutations: ownership guard, query composer, executor, service."""
from locations_core.errors import (
    LocationServiceError,
    NotAuthorized,
    StoreFailure,
    Unauthenticated,
    ValidationFailed,
)
from locations_core.service import LocationService
from locations_core.types import LocationRecord

__all__ = [
    "LocationRecord",
    "LocationService",
    "LocationServiceError",
    "NotAuthorized",
    "StoreFailure",
    "Unauthenticated",
    "ValidationFailed",
]
