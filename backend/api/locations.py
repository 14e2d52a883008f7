"""Location API routes. Every route acts on the authenticated caller's own locations."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from auth import get_caller_id
from locations_core import LocationService
from schemas.locations import (
    LocationCreate,
    LocationCreated,
    LocationDelete,
    LocationResponse,
    LocationUpdate,
)

router = APIRouter(prefix="/locations", tags=["locations"])


def get_location_service(request: Request) -> LocationService:
    """FastAPI dependency: the service built once at app startup."""
    return request.app.state.location_service


@router.get("", response_model=list[LocationResponse])
def list_locations(
    name: Optional[str] = Query(default=None),
    caller_id: str = Depends(get_caller_id),
    service: LocationService = Depends(get_location_service),
) -> list[LocationResponse]:
    """List the caller's locations, optionally filtered by a name substring."""
    return [
        LocationResponse(
            id=loc.public_id,
            name=loc.name,
            address=loc.address,
            created_at=loc.created_at,
            updated_at=loc.updated_at,
        )
        for loc in service.list_locations(caller_id, name)
    ]


@router.post("", response_model=LocationCreated)
def create_location(
    body: LocationCreate,
    caller_id: str = Depends(get_caller_id),
    service: LocationService = Depends(get_location_service),
) -> LocationCreated:
    """Create a location owned by the caller."""
    return LocationCreated(id=service.create_location(caller_id, body.name, body.address))


@router.put("", response_class=Response)
def update_location(
    body: LocationUpdate,
    caller_id: str = Depends(get_caller_id),
    service: LocationService = Depends(get_location_service),
) -> Response:
    """Update name and/or address of a location the caller owns."""
    service.update_location(caller_id, body.id, name=body.name, address=body.address)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("", response_class=Response)
def delete_location(
    body: LocationDelete,
    caller_id: str = Depends(get_caller_id),
    service: LocationService = Depends(get_location_service),
) -> Response:
    """Delete a location the caller owns."""
    service.delete_location(caller_id, body.id)
    return Response(status_code=status.HTTP_200_OK)
