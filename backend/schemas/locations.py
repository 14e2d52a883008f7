"""Pydantic schemas for location API."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LocationCreate(BaseModel):
    """Payload for creating a location."""

    name: str = Field(min_length=1)
    address: str = Field(min_length=1)


class LocationUpdate(BaseModel):
    """Payload for updating a location. Omitted or empty fields stay unchanged."""

    id: str = Field(min_length=1)
    name: str | None = None
    address: str | None = None


class LocationDelete(BaseModel):
    """Payload for deleting a location."""

    id: str = Field(min_length=1)


class LocationCreated(BaseModel):
    """Response for a created location."""

    id: str


class LocationResponse(BaseModel):
    """Location in API responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    address: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
