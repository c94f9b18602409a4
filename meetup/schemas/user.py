"""
User payload schemas.
"""

from typing import Optional

from pydantic import EmailStr, Field

from meetup.models.user import SkillLevel
from meetup.schemas.validation import PartialPayloadSchema, PayloadSchema

NAME_MAX_LENGTH = 100
BIO_MAX_LENGTH = 500


class UserCreate(PayloadSchema):
    email: EmailStr
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    google_id: Optional[str] = Field(default=None, min_length=1)
    age: Optional[int] = Field(default=None, ge=0, le=150)
    bio: Optional[str] = Field(default=None, max_length=BIO_MAX_LENGTH)
    profile_picture: Optional[str] = None
    location: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    skill_level: Optional[SkillLevel] = None


class UserUpdate(PartialPayloadSchema):
    """Profile update; email and google_id are fixed after creation."""

    non_nullable = ("name",)

    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    age: Optional[int] = Field(default=None, ge=0, le=150)
    bio: Optional[str] = Field(default=None, max_length=BIO_MAX_LENGTH)
    profile_picture: Optional[str] = None
    location: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    skill_level: Optional[SkillLevel] = None
