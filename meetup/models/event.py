"""
Event model for meetups.

created_by and attendees hold plain User ids rather than Beanie Links so
join/leave can be guarded with array operators in a single update.
"""

from datetime import datetime
from typing import List, Optional

from beanie import Document, PydanticObjectId
from pydantic import ConfigDict, Field
from pymongo import DESCENDING, IndexModel

from meetup.models.user import SkillLevel


class Event(Document):
    """
    A scheduled gathering. len(attendees) <= capacity is kept by the
    join logic, not by the document itself.
    """

    title: str
    description: str
    date: datetime
    capacity: int
    skill_level: Optional[SkillLevel] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    photo: Optional[str] = None
    created_by: PydanticObjectId
    attendees: List[PydanticObjectId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "events"
        indexes = [IndexModel([("date", DESCENDING)], name="date_desc")]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Sunday pickup game",
                "description": "Casual doubles at the park courts.",
                "date": "2025-06-15T10:00:00Z",
                "capacity": 8,
                "skill_level": "Intermediate",
                "attendees": [],
            }
        }
    )
