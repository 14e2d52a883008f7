# Schemas package
from .errors import ErrorResponse
from .health import HealthResponse
from .locations import LocationCreate, LocationCreated, LocationDelete, LocationResponse, LocationUpdate

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LocationCreate",
    "LocationCreated",
    "LocationDelete",
    "LocationResponse",
    "LocationUpdate",
]
