"""Failures raised by the location service, each mapped to one HTTP status."""


class LocationServiceError(Exception):
    """Base class: carries the response status and a human-readable message."""

    status_code = 500
    default_message = "Location request failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(LocationServiceError):
    """Identity resolution did not produce a user."""

    status_code = 401
    default_message = "User id not found in authorization token."


class ValidationFailed(LocationServiceError):
    """A required field is missing or empty."""

    status_code = 400
    default_message = "Invalid location payload."


class NotAuthorized(LocationServiceError):
    """No location matches both the public id and the caller.

    Raised for missing records too, so non-owners cannot probe for existence.
    """

    status_code = 401
    default_message = "Not authorized to modify specified location."


class StoreFailure(LocationServiceError):
    """Query composition or execution failed in the store."""

    status_code = 500
    default_message = "Location store failure."
