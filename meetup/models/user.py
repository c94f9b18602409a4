"""
User model for MongoDB (Beanie ODM).

Identity comes from an external provider (google_id, the JWT "sub" claim);
the record is created on first authenticated request or by a direct create.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import ConfigDict, Field
from pymongo import ASCENDING, IndexModel


class SkillLevel(str, Enum):
    """Skill levels shared by user profiles and events."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    EXPERT = "Expert"


class User(Document):
    """
    User document. id is MongoDB ObjectId; google_id links to the auth provider.
    """

    email: Indexed(str, unique=True)
    name: str
    google_id: Optional[str] = None
    age: Optional[int] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    skill_level: Optional[SkillLevel] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"
        # google_id is optional, so uniqueness only applies to stored strings
        indexes = [
            IndexModel(
                [("google_id", ASCENDING)],
                name="google_id_unique",
                unique=True,
                partialFilterExpression={"google_id": {"$type": "string"}},
            ),
        ]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "name": "Jane Doe",
                "google_id": "1234567890",
                "skill_level": "Beginner",
                "created_at": "2025-01-01T00:00:00Z",
            }
        }
    )
