"""
Event payload schemas.

EventCreateRequest is the HTTP body for POST /events; the route adds the
caller as created_by and the gateway validates the result as EventCreate.
"""

from datetime import datetime
from typing import List, Optional

from beanie import PydanticObjectId
from pydantic import Field, field_validator, model_validator

from meetup.models.user import SkillLevel
from meetup.schemas.validation import PartialPayloadSchema, PayloadSchema

TITLE_MAX_LENGTH = 100


def _unique_attendees(attendees: Optional[List[PydanticObjectId]]) -> Optional[List[PydanticObjectId]]:
    if attendees is not None and len(set(attendees)) != len(attendees):
        raise ValueError("attendees must not contain duplicates")
    return attendees


class EventCreateRequest(PayloadSchema):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(min_length=1)
    date: datetime
    capacity: int = Field(ge=1)
    skill_level: Optional[SkillLevel] = None
    location: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    photo: Optional[str] = None
    attendees: List[PydanticObjectId] = Field(default_factory=list)

    @field_validator("attendees")
    @classmethod
    def check_attendees(cls, v):
        return _unique_attendees(v)

    @model_validator(mode="after")
    def attendees_within_capacity(self):
        if len(self.attendees) > self.capacity:
            raise ValueError("attendees exceed capacity")
        return self


class EventCreate(EventCreateRequest):
    """Full create payload as persisted: the request plus its creator."""

    created_by: PydanticObjectId


class EventUpdate(PartialPayloadSchema):
    """Partial update; only the fields sent are replaced."""

    non_nullable = ("title", "description", "date", "capacity", "attendees")

    title: Optional[str] = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    skill_level: Optional[SkillLevel] = None
    location: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    photo: Optional[str] = None
    attendees: Optional[List[PydanticObjectId]] = None

    @field_validator("attendees")
    @classmethod
    def check_attendees(cls, v):
        return _unique_attendees(v)

    @model_validator(mode="after")
    def attendees_within_capacity(self):
        if self.attendees is not None and self.capacity is not None and len(self.attendees) > self.capacity:
            raise ValueError("attendees exceed capacity")
        return self
