"""
Domain errors raised by gateways, services and route handlers.

Each error carries the HTTP status it is translated to by the exception
handlers registered in meetup.main.
"""

from typing import List, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(AppError):
    """Payload rejected by a schema. errors lists every "field: reason"."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input data"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(AppError):
    """Business rule violation (duplicate join, full event, not an attendee)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class PersistenceError(AppError):
    """Underlying document store failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database operation failed"
