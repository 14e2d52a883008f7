"""Error response schema."""
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    detail: str
