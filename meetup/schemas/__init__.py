"""Pydantic schemas validating create/update payloads before persistence."""

from meetup.schemas.event import EventCreate, EventCreateRequest, EventUpdate
from meetup.schemas.user import UserCreate, UserUpdate
from meetup.schemas.validation import format_errors, parse_payload

__all__ = [
    "EventCreate",
    "EventCreateRequest",
    "EventUpdate",
    "UserCreate",
    "UserUpdate",
    "format_errors",
    "parse_payload",
]
